"""Exceptions and error policies for the Ollama client."""

from enum import Enum


class ErrorPolicy(str, Enum):
    """How a call treats a non-2xx response."""
    RAISE = "raise"
    SUPPRESS = "suppress"
    IDEMPOTENT_404 = "idempotent_404"


class OllamaError(Exception):
    """Base class for client errors."""

    def __init__(self, message: str, details: dict = None):
        self.details = details or {}
        super().__init__(message)


class PreconditionError(OllamaError, ValueError):
    """Raised when an argument is invalid, before any request is sent."""
    pass


class OllamaRequestError(OllamaError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status_code: int, status_text: str, body: str, **kwargs):
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(
            f"[{status_code}] {status_text} - {body}", **kwargs)


class StreamDecodeError(OllamaError):
    """Raised when a streamed line cannot be decoded."""

    def __init__(self, message: str, line: bytes = None, **kwargs):
        self.line = line
        super().__init__(message, **kwargs)


class OllamaStreamError(OllamaError):
    """Raised when the server reports an error inside a stream."""
    pass
