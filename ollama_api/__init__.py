"""Python client for the Ollama HTTP API."""

from .core import (
    ErrorPolicy,
    OllamaError,
    OllamaRequestError,
    OllamaSettings,
    OllamaStreamError,
    PreconditionError,
    StreamDecodeError,
)
from .models import (
    CompletionRequest,
    CopyRequest,
    CreateModelRequest,
    CreateModelResponse,
    DeleteRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    GenerateResponse,
    ModelFileBuilder,
    ModelList,
    ModelResponse,
    Options,
    ProgressResponse,
    PullPushRequest,
    Runner,
    ShowRequest,
    ShowResponse,
)
from .services import AsyncOllamaClient, OllamaClient
from .streaming import NDJSONDecoder, StreamConfig

__version__ = "0.1.0"

__all__ = [
    'OllamaClient',
    'AsyncOllamaClient',
    'OllamaSettings',
    'StreamConfig',
    'NDJSONDecoder',
    'ErrorPolicy',
    'OllamaError',
    'OllamaRequestError',
    'OllamaStreamError',
    'PreconditionError',
    'StreamDecodeError',
    'CompletionRequest',
    'CopyRequest',
    'CreateModelRequest',
    'CreateModelResponse',
    'DeleteRequest',
    'EmbeddingRequest',
    'EmbeddingResponse',
    'GenerateResponse',
    'ModelFileBuilder',
    'ModelList',
    'ModelResponse',
    'Options',
    'ProgressResponse',
    'PullPushRequest',
    'Runner',
    'ShowRequest',
    'ShowResponse',
]
