import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Sequence, Tuple

from ..config import PROBE_TIMEOUT_SECONDS
from .errors import ParseError, UnexpectedResponseFormat
from .shapes import shape_for

logger = logging.getLogger(__name__)

PROBE_PROMPT = "Hello"
PROBE_MAX_TOKENS = 10


@dataclass(frozen=True)
class ModelVariant:
    id: str
    display_name: str
    uses_message_shape: bool
    available: bool = False
    last_checked: Optional[datetime] = None

    def matches(self, preference: str) -> bool:
        needle = preference.lower()
        return needle in self.id.lower() or needle in self.display_name.lower()


# Trial priority: most capable first
DEFAULT_VARIANTS: Tuple[ModelVariant, ...] = (
    ModelVariant("anthropic.claude-3-5-sonnet-20241022-v2:0", "Claude 3.5 Sonnet v2", True),
    ModelVariant("anthropic.claude-3-5-sonnet-20240620-v1:0", "Claude 3.5 Sonnet", True),
    ModelVariant("anthropic.claude-3-5-haiku-20241022-v1:0", "Claude 3.5 Haiku", True),
    ModelVariant("anthropic.claude-3-sonnet-20240229-v1:0", "Claude 3 Sonnet", True),
    ModelVariant("anthropic.claude-3-haiku-20240307-v1:0", "Claude 3 Haiku", True),
    ModelVariant("anthropic.claude-v2:1", "Claude v2.1", False),
    ModelVariant("anthropic.claude-v2", "Claude v2", False),
)


class ModelRegistry:
    """Ordered catalog of model variants and their availability.

    Variants are immutable; availability changes replace the whole tuple at
    once, so concurrent readers always see a consistent snapshot.
    """

    def __init__(self, variants: Sequence[ModelVariant] = DEFAULT_VARIANTS):
        self._variants: Tuple[ModelVariant, ...] = tuple(variants)

    def __len__(self) -> int:
        return len(self._variants)

    def __iter__(self) -> Iterator[ModelVariant]:
        return iter(self._variants)

    def get(self, model_id: str) -> ModelVariant:
        for variant in self._variants:
            if variant.id == model_id:
                return variant
        raise KeyError(f"Model not found: {model_id}")

    def probe_all(self, invoker, timeout: float = PROBE_TIMEOUT_SECONDS) -> None:
        """Check every variant with a minimal generation call, one after another.

        Any failure, including a reply that does not parse into the variant's
        response shape, marks the variant unavailable. Never raises.
        """
        logger.info("Testing model availability...")
        checked = []
        for variant in self._variants:
            available = self._probe(variant, invoker, timeout)
            checked.append(
                replace(variant, available=available, last_checked=datetime.now(timezone.utc))
            )
        self._variants = tuple(checked)

    @staticmethod
    def _probe(variant: ModelVariant, invoker, timeout: float) -> bool:
        shape = shape_for(variant)
        try:
            body = json.dumps(shape.build_probe_payload(PROBE_PROMPT, PROBE_MAX_TOKENS))
            raw = invoker.invoke(variant.id, body.encode("utf-8"), timeout=timeout)
            try:
                response = json.loads(raw)
            except (TypeError, ValueError) as exc:
                raise ParseError(f"error parsing response: {exc}") from exc
            if not isinstance(response, dict) or shape.extract_text(response) is None:
                raise UnexpectedResponseFormat(variant.display_name)
        except Exception as exc:
            logger.warning("Model %s (%s): UNAVAILABLE - %s", variant.display_name, variant.id, exc)
            return False
        logger.info("Model %s (%s): AVAILABLE", variant.display_name, variant.id)
        return True

    def list_available_names(self) -> List[str]:
        return [v.display_name for v in self._variants if v.available]

    def build_candidate_order(self, preference: Optional[str] = None) -> List[ModelVariant]:
        """Available variants in trial order.

        The first available variant whose id or display name contains
        ``preference`` (case-insensitive) goes first; the rest keep registry order.
        """
        available = [v for v in self._variants if v.available]
        if not preference:
            return available

        promoted = next((v for v in available if v.matches(preference)), None)
        if promoted is None:
            return available
        return [promoted] + [v for v in available if v.id != promoted.id]
