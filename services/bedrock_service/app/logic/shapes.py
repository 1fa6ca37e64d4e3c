"""Request/response shapes for the two Anthropic APIs exposed by Bedrock.

Newer Claude models speak the Messages API; Claude v2 and v2.1 only accept the
legacy Text Completions API. Each variant resolves to one shape via its
``uses_message_shape`` flag and the generator only talks to the shape.
"""

from typing import Any, Dict, Optional

from langchain_core.prompts import PromptTemplate

ANTHROPIC_VERSION = "bedrock-2023-05-31"

SYSTEM_PROMPT = (
    "You are a helpful AI assistant with access to conversation history and uploaded files. "
    "When responding, consider the full context provided, including previous conversations and any file content. "
    "If file content is mentioned in the context, analyze and reference it appropriately in your response. "
    "Be conversational, helpful, and maintain continuity with previous interactions."
)

COMPLETION_PREAMBLE = (
    "You are a helpful AI assistant with conversation memory and file analysis capabilities. "
    "Please provide thoughtful, contextual responses based on the information provided."
)

completion_prompt = PromptTemplate.from_template(
    "\n\nHuman: {preamble}\n\n{prompt}\n\nAssistant:"
).partial(preamble=COMPLETION_PREAMBLE)

probe_completion_prompt = PromptTemplate.from_template("\n\nHuman: {prompt}\n\nAssistant:")


class MessageShape:
    name = "messages"

    def build_payload(self, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }

    def build_probe_payload(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return {
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    def extract_text(self, body: Dict[str, Any]) -> Optional[str]:
        content = body.get("content")
        if not isinstance(content, list) or not content:
            return None
        first = content[0]
        if not isinstance(first, dict):
            return None
        text = first.get("text")
        return text if isinstance(text, str) else None


class CompletionShape:
    name = "completion"

    def build_payload(self, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "prompt": completion_prompt.format(prompt=prompt),
            "max_tokens_to_sample": max_tokens,
            "temperature": temperature,
        }

    def build_probe_payload(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return {
            "prompt": probe_completion_prompt.format(prompt=prompt),
            "max_tokens_to_sample": max_tokens,
        }

    def extract_text(self, body: Dict[str, Any]) -> Optional[str]:
        completion = body.get("completion")
        return completion if isinstance(completion, str) else None


MESSAGE_SHAPE = MessageShape()
COMPLETION_SHAPE = CompletionShape()


def shape_for(variant):
    return MESSAGE_SHAPE if variant.uses_message_shape else COMPLETION_SHAPE
