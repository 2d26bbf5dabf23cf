"""Core configuration and error types."""

from .config import OllamaSettings, settings, DEFAULT_BASE_URL
from .errors import (
    ErrorPolicy,
    OllamaError,
    PreconditionError,
    OllamaRequestError,
    StreamDecodeError,
    OllamaStreamError,
)

__all__ = [
    'OllamaSettings',
    'settings',
    'DEFAULT_BASE_URL',
    'ErrorPolicy',
    'OllamaError',
    'PreconditionError',
    'OllamaRequestError',
    'StreamDecodeError',
    'OllamaStreamError',
]
