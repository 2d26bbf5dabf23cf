"""Ollama API clients."""

from .base import BaseOllamaClient
from .ollama_client import OllamaClient
from .async_client import AsyncOllamaClient

__all__ = [
    'BaseOllamaClient',
    'OllamaClient',
    'AsyncOllamaClient',
]
