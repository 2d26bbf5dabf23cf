"""Test configuration and fixtures."""

import json

import httpx
import pytest

from ollama_api import AsyncOllamaClient, OllamaClient

BASE_URL = "http://ollama.test:11434"


class RecordingStream(httpx.SyncByteStream):
    """Response body that counts chunk reads and records close()."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.reads = 0
        self.closed = False

    def __iter__(self):
        for chunk in self.chunks:
            self.reads += 1
            yield chunk

    def close(self):
        self.closed = True


class AsyncRecordingStream(httpx.AsyncByteStream):
    """Async variant of RecordingStream."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.reads = 0
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            self.reads += 1
            yield chunk

    async def aclose(self):
        self.closed = True


def ndjson(*objects) -> bytes:
    """Encode objects as a newline-delimited JSON body."""
    return b"".join(json.dumps(obj).encode() + b"\n" for obj in objects)


@pytest.fixture
def requests_seen():
    """Requests received by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(requests_seen):
    """Create an OllamaClient whose requests are answered by ``handler``."""
    def _make(handler):
        def _record(request):
            requests_seen.append(request)
            return handler(request)
        http_client = httpx.Client(transport=httpx.MockTransport(_record))
        return OllamaClient(base_url=BASE_URL, http_client=http_client)
    return _make


@pytest.fixture
def make_async_client(requests_seen):
    """Create an AsyncOllamaClient whose requests are answered by ``handler``."""
    def _make(handler):
        def _record(request):
            requests_seen.append(request)
            return handler(request)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return AsyncOllamaClient(base_url=BASE_URL, http_client=http_client)
    return _make


@pytest.fixture(name="ndjson")
def ndjson_fixture():
    """Encoder for newline-delimited JSON bodies."""
    return ndjson


@pytest.fixture(name="recording_stream")
def recording_stream_fixture():
    """Factory for a sync response body that records reads and close()."""
    return RecordingStream


@pytest.fixture(name="async_recording_stream")
def async_recording_stream_fixture():
    """Factory for an async response body that records reads and close()."""
    return AsyncRecordingStream
