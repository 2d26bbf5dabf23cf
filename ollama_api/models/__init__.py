"""Request and response models for the Ollama API."""

from .completion import Runner, Options, CompletionRequest, GenerateResponse
from .embedding import EmbeddingRequest, EmbeddingResponse
from .model import (
    CreateModelRequest,
    CreateModelResponse,
    ModelResponse,
    ModelList,
    ShowRequest,
    ShowResponse,
    CopyRequest,
    DeleteRequest,
)
from .progress import PullPushRequest, ProgressResponse
from .modelfile import ModelFileBuilder

__all__ = [
    'Runner',
    'Options',
    'CompletionRequest',
    'GenerateResponse',
    'EmbeddingRequest',
    'EmbeddingResponse',
    'CreateModelRequest',
    'CreateModelResponse',
    'ModelResponse',
    'ModelList',
    'ShowRequest',
    'ShowResponse',
    'CopyRequest',
    'DeleteRequest',
    'PullPushRequest',
    'ProgressResponse',
    'ModelFileBuilder',
]
