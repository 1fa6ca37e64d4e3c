import json
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import GENERATION_TIMEOUT_SECONDS
from .errors import (
    AllModelsFailed,
    BedrockServiceError,
    NoAvailableModels,
    ParseError,
    SerializationError,
    UnexpectedResponseFormat,
)
from .registry import ModelRegistry, ModelVariant
from .shapes import shape_for

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7


@dataclass(frozen=True)
class GenerationResult:
    text: str
    model_used: str


class FallbackGenerator:
    """Generate text with the first model variant that answers.

    Candidates are tried strictly in order and each at most once. Failures of
    a single candidate are logged and swallowed; only running out of
    candidates is reported to the caller.
    """

    def __init__(self, registry: ModelRegistry, invoker, timeout: float = GENERATION_TIMEOUT_SECONDS):
        self.registry = registry
        self.invoker = invoker
        self.timeout = timeout

    def generate(
        self,
        prompt: str,
        preferred_model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> GenerationResult:
        # Zero means "unset", as in the JSON contract
        if not max_tokens:
            max_tokens = DEFAULT_MAX_TOKENS
        if not temperature:
            temperature = DEFAULT_TEMPERATURE

        candidates = self.registry.build_candidate_order(preferred_model)
        if not candidates:
            raise NoAvailableModels()

        last_error: Optional[BedrockServiceError] = None
        for variant in candidates:
            logger.info("Trying model: %s (%s)", variant.display_name, variant.id)
            try:
                text = self._attempt(variant, prompt, max_tokens, temperature)
            except BedrockServiceError as exc:
                logger.warning("Error with model %s: %s", variant.display_name, exc)
                last_error = exc
                continue
            logger.info("Successfully used model: %s", variant.display_name)
            return GenerationResult(text=text, model_used=variant.display_name)

        raise AllModelsFailed(last_error) from last_error

    def _attempt(self, variant: ModelVariant, prompt: str, max_tokens: int, temperature: float) -> str:
        shape = shape_for(variant)
        payload = shape.build_payload(prompt, max_tokens, temperature)
        try:
            body = json.dumps(payload, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"error marshaling request: {exc}") from exc

        raw = self.invoker.invoke(variant.id, body, timeout=self.timeout)

        try:
            response = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise ParseError(f"error parsing response: {exc}") from exc
        if not isinstance(response, dict):
            raise ParseError(f"error parsing response: expected an object, got {type(response).__name__}")

        text = shape.extract_text(response)
        if text is None:
            raise UnexpectedResponseFormat(variant.display_name)
        return text
