from services.bedrock_service.app.logic.registry import ModelVariant
from services.bedrock_service.app.logic.shapes import (
    COMPLETION_SHAPE,
    MESSAGE_SHAPE,
    SYSTEM_PROMPT,
    shape_for,
)

PROMPT = "Summarise {this} file:\n\nHuman: not a turn"


def test_shape_for_uses_variant_flag():
    assert shape_for(ModelVariant("m", "M", True)) is MESSAGE_SHAPE
    assert shape_for(ModelVariant("c", "C", False)) is COMPLETION_SHAPE


def test_message_payload():
    payload = MESSAGE_SHAPE.build_payload(PROMPT, 2000, 0.7)
    assert payload["anthropic_version"] == "bedrock-2023-05-31"
    assert payload["system"] == SYSTEM_PROMPT and payload["system"]
    assert payload["messages"] == [{"role": "user", "content": PROMPT}]
    assert payload["max_tokens"] == 2000
    assert payload["temperature"] == 0.7


def test_message_payload_does_not_truncate():
    long_prompt = "x" * 50000
    payload = MESSAGE_SHAPE.build_payload(long_prompt, 10, 0.5)
    assert payload["messages"][0]["content"] == long_prompt


def test_completion_payload_wraps_prompt_verbatim():
    payload = COMPLETION_SHAPE.build_payload(PROMPT, 512, 0.2)
    wrapped = payload["prompt"]
    assert wrapped.startswith("\n\nHuman: You are a helpful AI assistant")
    assert wrapped.endswith("\n\nAssistant:")
    assert PROMPT in wrapped
    assert payload["max_tokens_to_sample"] == 512
    assert payload["temperature"] == 0.2
    assert "max_tokens" not in payload


def test_message_extract_text():
    assert MESSAGE_SHAPE.extract_text({"content": [{"type": "text", "text": "hi"}]}) == "hi"
    assert MESSAGE_SHAPE.extract_text({"content": []}) is None
    assert MESSAGE_SHAPE.extract_text({"content": "hi"}) is None
    assert MESSAGE_SHAPE.extract_text({"content": ["hi"]}) is None
    assert MESSAGE_SHAPE.extract_text({"content": [{"text": 3}]}) is None
    assert MESSAGE_SHAPE.extract_text({"completion": "hi"}) is None


def test_completion_extract_text():
    assert COMPLETION_SHAPE.extract_text({"completion": "hi"}) == "hi"
    assert COMPLETION_SHAPE.extract_text({"completion": ""}) == ""
    assert COMPLETION_SHAPE.extract_text({"completion": None}) is None
    assert COMPLETION_SHAPE.extract_text({"content": [{"text": "hi"}]}) is None
