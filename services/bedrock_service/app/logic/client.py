import logging
import threading
from typing import Dict

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from .errors import RemoteError, TransportError

logger = logging.getLogger(__name__)


class BedrockInvoker:
    """Thin wrapper around the bedrock-runtime InvokeModel call.

    Each timeout gets its own client. The timeout is botocore's read_timeout,
    which bounds every socket read of one attempt, not the attempt as a whole:
    a reply that keeps trickling in can outlast it. Botocore retries are
    disabled; retrying is the fallback loop's decision.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._session = boto3.session.Session(
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            aws_session_token=settings.session_token,
            region_name=settings.region,
        )
        self._clients: Dict[float, object] = {}
        self._lock = threading.Lock()

    def _client_for(self, timeout: float):
        with self._lock:
            client = self._clients.get(timeout)
            if client is None:
                config = Config(
                    connect_timeout=self._settings.connect_timeout,
                    read_timeout=timeout,
                    retries={"max_attempts": 0},
                )
                client = self._session.client("bedrock-runtime", config=config)
                self._clients[timeout] = client
            return client

    def invoke(self, model_id: str, body: bytes, timeout: float) -> bytes:
        client = self._client_for(timeout)
        logger.debug("InvokeModel %s (timeout=%ss)", model_id, timeout)
        try:
            resp = client.invoke_model(
                modelId=model_id,
                body=body,
                contentType="application/json",
                accept="application/json",
            )
            return resp["body"].read()
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            raise RemoteError(f"{model_id}: {code}: {exc}") from exc
        except BotoCoreError as exc:
            raise TransportError(f"{model_id}: {exc}") from exc
