from typing import Optional


class BedrockServiceError(Exception):
    """Base class for every error raised by the Bedrock service."""


class ConfigurationError(BedrockServiceError):
    """Missing credentials or region. Fatal at startup."""


class NoAvailableModels(BedrockServiceError):
    def __init__(self, message: str = "no available models found"):
        super().__init__(message)


# Per-attempt failures. The generator records these and moves on to the next candidate.

class TransportError(BedrockServiceError):
    pass


class RemoteError(BedrockServiceError):
    pass


class SerializationError(BedrockServiceError):
    pass


class ParseError(BedrockServiceError):
    pass


class UnexpectedResponseFormat(BedrockServiceError):
    def __init__(self, model_name: str):
        super().__init__(f"unexpected response format from model {model_name}")
        self.model_name = model_name


class AllModelsFailed(BedrockServiceError):
    def __init__(self, last_error: Optional[BaseException]):
        super().__init__(f"all available models failed. Last error: {last_error}")
        self.last_error = last_error
