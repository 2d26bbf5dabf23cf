"""Streaming package for decoding newline-delimited JSON bodies."""

from .ndjson import NDJSONDecoder
from .stream_config import StreamConfig

__all__ = [
    'NDJSONDecoder',
    'StreamConfig',
]
