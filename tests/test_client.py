import io

import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from services.bedrock_service.app.config import Settings
from services.bedrock_service.app.logic.client import BedrockInvoker
from services.bedrock_service.app.logic.errors import RemoteError, TransportError

MODEL_ID = "anthropic.claude-3-haiku-20240307-v1:0"
REQUEST = b'{"anthropic_version": "bedrock-2023-05-31", "max_tokens": 10, "messages": []}'


@pytest.fixture
def invoker():
    return BedrockInvoker(Settings(access_key_id="AKIAEXAMPLE", secret_access_key="secret", region="us-east-1"))


def _expected_params():
    return {
        "modelId": MODEL_ID,
        "body": REQUEST,
        "contentType": "application/json",
        "accept": "application/json",
    }


def test_invoke_returns_raw_body(invoker):
    payload = b'{"content": [{"text": "hi"}]}'
    client = invoker._client_for(60)
    with Stubber(client) as stub:
        stub.add_response(
            "invoke_model",
            {"body": StreamingBody(io.BytesIO(payload), len(payload)), "contentType": "application/json"},
            _expected_params(),
        )
        assert invoker.invoke(MODEL_ID, REQUEST, timeout=60) == payload
        stub.assert_no_pending_responses()


def test_client_error_becomes_remote_error(invoker):
    client = invoker._client_for(60)
    with Stubber(client) as stub:
        stub.add_client_error("invoke_model", service_error_code="AccessDeniedException", http_status_code=403)
        with pytest.raises(RemoteError, match="AccessDeniedException"):
            invoker.invoke(MODEL_ID, REQUEST, timeout=60)


def test_connection_failure_becomes_transport_error(invoker, monkeypatch):
    client = invoker._client_for(30)

    def refuse(**kwargs):
        raise EndpointConnectionError(endpoint_url="https://bedrock-runtime.us-east-1.amazonaws.com")

    monkeypatch.setattr(client, "invoke_model", refuse)
    with pytest.raises(TransportError, match=MODEL_ID):
        invoker.invoke(MODEL_ID, REQUEST, timeout=30)


def test_one_client_per_timeout_scope(invoker):
    probe = invoker._client_for(30)
    generation = invoker._client_for(60)
    assert probe is not generation
    assert invoker._client_for(30) is probe
    assert probe.meta.config.read_timeout == 30
    assert generation.meta.config.read_timeout == 60
