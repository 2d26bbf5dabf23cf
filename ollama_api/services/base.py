"""Base class shared by the sync and async Ollama clients."""

import logging
import uuid
from abc import ABC
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import OllamaSettings, settings as default_settings
from ..core.errors import (
    ErrorPolicy,
    OllamaRequestError,
    OllamaStreamError,
    PreconditionError,
    StreamDecodeError,
)
from ..models import CompletionRequest, ModelList, ModelResponse, PullPushRequest
from ..streaming import StreamConfig

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}

T = TypeVar("T", bound=BaseModel)


class BaseOllamaClient(ABC):
    """Request building, validation and response handling for both clients."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[OllamaSettings] = None,
        stream_config: Optional[StreamConfig] = None,
    ):
        self.settings = settings or default_settings
        self.base_url = (base_url or self.settings.BASE_URL).rstrip("/")
        self.stream_config = stream_config or StreamConfig(
            max_line_bytes=self.settings.STREAM_MAX_LINE_BYTES)
        logger.debug(f"Using Ollama base URL: {self.base_url}")

    def _get_request_id(self) -> str:
        return uuid.uuid4().hex[:8]

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _require(value: Any, name: str) -> Any:
        if value is None:
            raise PreconditionError(f"{name} can not be None.")
        return value

    @staticmethod
    def _require_text(value: Optional[str], name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PreconditionError(f"{name} can not be None or empty.")
        return value

    def _completion_payload(self, request: CompletionRequest, stream: bool) -> Dict[str, Any]:
        self._require(request, "request")
        if stream and not request.stream:
            raise PreconditionError(
                "Request must set the stream property to true.")
        if not stream and request.stream:
            raise PreconditionError("Stream mode must be disabled.")
        return self._payload(request)

    def _pull_push_payload(
        self,
        name: str,
        insecure: bool,
        username: Optional[str],
        password: Optional[str],
        stream: bool,
    ) -> Dict[str, Any]:
        self._require_text(name, "model name")
        return self._payload(PullPushRequest(
            name=name,
            insecure=insecure,
            username=username,
            password=password,
            stream=stream,
        ))

    @staticmethod
    def _payload(request: BaseModel) -> Dict[str, Any]:
        return request.model_dump(mode="json", exclude_none=True)

    def _check_status(
        self,
        response: httpx.Response,
        policy: ErrorPolicy,
        request_id: str,
        subject: Optional[str] = None,
        log_level: int = logging.WARNING,
    ) -> bool:
        """Apply an error policy to a fully read response.

        Returns True when the call counts as a success. Raises
        OllamaRequestError when the policy says the failure is fatal.
        """
        if response.is_success:
            return True

        status_code = response.status_code
        status_text = response.reason_phrase
        body = response.text
        logger.log(
            log_level, f"[{request_id}] [{status_code}] {status_text} - {body}")

        if policy == ErrorPolicy.SUPPRESS:
            return False
        if (policy == ErrorPolicy.IDEMPOTENT_404 and status_code == 404
                and subject and subject in body):
            logger.info(f"[{request_id}] {subject} is already absent")
            return True
        raise OllamaRequestError(status_code, status_text, body)

    @staticmethod
    def _decode(model_cls: Type[T], content: bytes) -> T:
        return model_cls.model_validate_json(content)

    @staticmethod
    def _decode_models(content: bytes) -> List[ModelResponse]:
        # An empty body or a JSON null both mean no models
        if not content or content.strip() in (b"", b"null"):
            return []
        model_list = ModelList.model_validate_json(content)
        return list(model_list.models or [])

    @staticmethod
    def _parse_stream_item(data: Dict[str, Any], model_cls: Type[T]) -> T:
        if "error" in data:
            raise OllamaStreamError(str(data["error"]), details=data)
        try:
            return model_cls.model_validate(data)
        except ValidationError as e:
            raise StreamDecodeError(
                f"Invalid {model_cls.__name__} in stream: {e}") from e

    @staticmethod
    def _is_final(item: BaseModel) -> bool:
        return getattr(item, "done", None) is True

    @staticmethod
    def _blob_file(digest: str, file: Any):
        filename = getattr(file, "name", None)
        if not isinstance(filename, str) or not filename:
            filename = digest
        return {"file": (filename.rsplit("/", 1)[-1], file, "application/octet-stream")}
