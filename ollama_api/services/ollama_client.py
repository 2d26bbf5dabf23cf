"""Blocking Ollama API client."""

import logging
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from .base import BaseOllamaClient, DEFAULT_HEADERS
from ..core.config import OllamaSettings
from ..core.errors import ErrorPolicy
from ..models import (
    CompletionRequest,
    CopyRequest,
    CreateModelRequest,
    CreateModelResponse,
    DeleteRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    GenerateResponse,
    ModelResponse,
    ProgressResponse,
    ShowRequest,
    ShowResponse,
)
from ..streaming import NDJSONDecoder, StreamConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class OllamaClient(BaseOllamaClient):
    """Client for the Ollama HTTP API.

    Transport settings (timeouts, pooling, TLS, proxies) belong to the
    ``httpx.Client`` passed as ``http_client``. When none is given the
    client creates one and closes it in :meth:`close`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        settings: Optional[OllamaSettings] = None,
        stream_config: Optional[StreamConfig] = None,
    ):
        super().__init__(base_url, settings, stream_config)
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.Client(
            timeout=self.settings.REQUEST_TIMEOUT,
            headers=DEFAULT_HEADERS,
        )
        logger.info("Initialized OllamaClient")

    def __enter__(self) -> "OllamaClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the underlying httpx client if this instance created it."""
        if self._owns_http_client:
            self.http_client.close()

    def _request(self, method: str, path: str, request_id: str, **kwargs) -> httpx.Response:
        logger.debug(f"[{request_id}] {method} {path}")
        return self.http_client.request(method, self._url(path), **kwargs)

    def _send(self, method: str, path: str, request_id: str, **kwargs) -> httpx.Response:
        response = self._request(method, path, request_id, **kwargs)
        self._check_status(response, ErrorPolicy.RAISE, request_id)
        return response

    def _stream(
        self,
        path: str,
        payload: Dict[str, Any],
        model_cls: Type[T],
        request_id: str,
    ) -> Iterator[T]:
        logger.debug(f"[{request_id}] POST {path} (stream)")
        with self.http_client.stream("POST", self._url(path), json=payload) as response:
            if not response.is_success:
                response.read()
                self._check_status(response, ErrorPolicy.RAISE, request_id)

            decoder = NDJSONDecoder(self.stream_config)
            for chunk in response.iter_bytes(self.stream_config.chunk_size):
                for data in decoder.feed(chunk):
                    item = self._parse_stream_item(data, model_cls)
                    yield item
                    if self._is_final(item):
                        logger.debug(f"[{request_id}] Stream completed")
                        return
            for data in decoder.flush():
                yield self._parse_stream_item(data, model_cls)
        logger.debug(f"[{request_id}] Stream closed by server")

    def generate(self, request: CompletionRequest) -> GenerateResponse:
        """Generate a completion. ``request.stream`` must be False."""
        payload = self._completion_payload(request, stream=False)
        request_id = self._get_request_id()
        logger.info(f"[{request_id}] Generating with model: {request.model}")

        response = self._send("POST", "/api/generate", request_id, json=payload)
        return self._decode(GenerateResponse, response.content)

    def generate_streaming(self, request: CompletionRequest) -> Iterator[GenerateResponse]:
        """Stream a completion. ``request.stream`` must be True.

        The returned generator ends after the chunk marked ``done``.
        Closing it closes the connection.
        """
        payload = self._completion_payload(request, stream=True)
        request_id = self._get_request_id()
        logger.info(
            f"[{request_id}] Starting streaming generation with model: {request.model}")
        return self._stream("/api/generate", payload, GenerateResponse, request_id)

    def embedding(self, request: EmbeddingRequest) -> EmbeddingResponse:
        """Generate embeddings from a model."""
        self._require(request, "request")
        request_id = self._get_request_id()

        response = self._send(
            "POST", "/api/embeddings", request_id, json=self._payload(request))
        return self._decode(EmbeddingResponse, response.content)

    def create_model(self, name: str, modelfile: str) -> CreateModelResponse:
        """Create a model from the content of a Modelfile."""
        self._require_text(name, "name")
        self._require_text(modelfile, "modelfile")
        request_id = self._get_request_id()
        logger.info(f"[{request_id}] Creating model: {name}")

        payload = self._payload(CreateModelRequest(
            name=name, modelfile=modelfile, stream=False))
        response = self._send("POST", "/api/create", request_id, json=payload)
        return self._decode(CreateModelResponse, response.content)

    def create_model_streaming(self, name: str, modelfile: str) -> Iterator[CreateModelResponse]:
        """Create a model, yielding status updates until the server finishes."""
        self._require_text(name, "name")
        self._require_text(modelfile, "modelfile")
        request_id = self._get_request_id()
        logger.info(f"[{request_id}] Creating model (stream): {name}")

        payload = self._payload(CreateModelRequest(
            name=name, modelfile=modelfile, stream=True))
        return self._stream("/api/create", payload, CreateModelResponse, request_id)

    def is_blob_exists(self, digest: str) -> bool:
        """Check whether the server holds a blob. Never raises on 404."""
        self._require_text(digest, "digest")
        request_id = self._get_request_id()

        response = self._request("HEAD", f"/api/blobs/{digest}", request_id)
        return self._check_status(
            response, ErrorPolicy.SUPPRESS, request_id, log_level=logging.DEBUG)

    def create_blob(self, digest: str, file) -> bool:
        """Upload a blob. ``file`` is bytes or a binary file object."""
        self._require_text(digest, "digest")
        self._require(file, "file")
        request_id = self._get_request_id()
        logger.info(f"[{request_id}] Uploading blob: {digest}")

        response = self._send(
            "POST", f"/api/blobs/{digest}", request_id,
            files=self._blob_file(digest, file))
        return response.is_success

    def list_models(self) -> List[ModelResponse]:
        """List models that are available locally."""
        request_id = self._get_request_id()

        response = self._send("GET", "/api/tags", request_id)
        models = self._decode_models(response.content)
        logger.info(f"[{request_id}] Found {len(models)} models")
        return models

    def show_model(self, name: str) -> ShowResponse:
        """Show the modelfile, template, parameters, license and system prompt of a model."""
        self._require_text(name, "model name")
        request_id = self._get_request_id()

        response = self._send(
            "POST", "/api/show", request_id,
            json=self._payload(ShowRequest(name=name)))
        return self._decode(ShowResponse, response.content)

    def copy_model(self, source: str, destination: str) -> bool:
        """Copy a model. Failures are logged and reported as False."""
        self._require_text(source, "source model name")
        self._require_text(destination, "destination model name")
        request_id = self._get_request_id()

        payload = self._payload(CopyRequest(source=source, destination=destination))
        response = self._request("POST", "/api/copy", request_id, json=payload)
        return self._check_status(response, ErrorPolicy.SUPPRESS, request_id)

    def delete_model(self, name: str) -> bool:
        """Delete a model. Deleting a model the server does not know succeeds."""
        self._require_text(name, "model name")
        request_id = self._get_request_id()
        logger.info(f"[{request_id}] Deleting model: {name}")

        response = self._request(
            "DELETE", "/api/delete", request_id,
            json=self._payload(DeleteRequest(name=name)))
        return self._check_status(
            response, ErrorPolicy.IDEMPOTENT_404, request_id, subject=name)

    def pull_model(
        self,
        name: str,
        insecure: bool = True,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> ProgressResponse:
        """Download a model from the library and return the final status."""
        return self._pull_push("/api/pull", name, insecure, username, password)

    def push_model(
        self,
        name: str,
        insecure: bool = False,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> ProgressResponse:
        """Upload a model (``namespace/model:tag``) and return the final status."""
        return self._pull_push("/api/push", name, insecure, username, password)

    def pull_model_stream(
        self,
        name: str,
        insecure: bool = True,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Iterator[ProgressResponse]:
        """Download a model, yielding progress events.

        Progress is cumulative per layer digest and is not aggregated here.
        """
        return self._pull_push_stream("/api/pull", name, insecure, username, password)

    def push_model_stream(
        self,
        name: str,
        insecure: bool = False,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Iterator[ProgressResponse]:
        """Upload a model, yielding progress events."""
        return self._pull_push_stream("/api/push", name, insecure, username, password)

    def _pull_push(self, path, name, insecure, username, password) -> ProgressResponse:
        payload = self._pull_push_payload(name, insecure, username, password, stream=False)
        request_id = self._get_request_id()
        logger.info(f"[{request_id}] {path} {name}")

        response = self._send("POST", path, request_id, json=payload)
        return self._decode(ProgressResponse, response.content)

    def _pull_push_stream(self, path, name, insecure, username, password) -> Iterator[ProgressResponse]:
        payload = self._pull_push_payload(name, insecure, username, password, stream=True)
        request_id = self._get_request_id()
        logger.info(f"[{request_id}] {path} {name} (stream)")
        return self._stream(path, payload, ProgressResponse, request_id)
