# Central config for Bedrock service
import os
from dataclasses import dataclass
from typing import Optional

from .logic.errors import ConfigurationError

DEFAULT_REGION = "us-east-1"

AWS_REGION = os.getenv("AWS_REGION") or DEFAULT_REGION
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "9000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Timeout scopes for a single InvokeModel attempt
PROBE_TIMEOUT_SECONDS = 30.0
GENERATION_TIMEOUT_SECONDS = 60.0
CONNECT_TIMEOUT_SECONDS = 10.0

SERVICE_NAME = "bedrock-service"
SERVICE_VERSION = "1.0.0"
SERVICE_FEATURES = "conversation-context, file-analysis, multi-model-support"


@dataclass(frozen=True)
class Settings:
    access_key_id: str
    secret_access_key: str
    region: str = DEFAULT_REGION
    session_token: Optional[str] = None
    probe_timeout: float = PROBE_TIMEOUT_SECONDS
    generation_timeout: float = GENERATION_TIMEOUT_SECONDS
    connect_timeout: float = CONNECT_TIMEOUT_SECONDS


def load_settings() -> Settings:
    """Read AWS credentials and region from the environment.

    Raises ConfigurationError when the static credentials are missing; the
    service must not start serving traffic without them.
    """
    access_key = os.getenv("AWS_ACCESS_KEY_ID", "")
    secret_key = os.getenv("AWS_SECRET_ACCESS_KEY", "")
    region = (os.getenv("AWS_REGION") or DEFAULT_REGION).strip()

    if not access_key or not secret_key:
        raise ConfigurationError("AWS credentials not provided")
    if not region:
        raise ConfigurationError("AWS region not provided")

    return Settings(
        access_key_id=access_key,
        secret_access_key=secret_key,
        region=region,
        session_token=os.getenv("AWS_SESSION_TOKEN") or None,
    )
