"""Model management data models."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class CreateModelRequest(BaseModel):
    """Request body for /api/create."""
    model_config = ConfigDict(frozen=True)

    name: str
    modelfile: Optional[str] = None
    stream: Optional[bool] = None
    path: Optional[str] = None


class CreateModelResponse(BaseModel):
    """Status of a model creation, or one streamed status update."""
    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None


class ModelResponse(BaseModel):
    """A locally available model."""
    model_config = ConfigDict(frozen=True)

    name: str
    modified_at: Optional[datetime] = None
    size: Optional[int] = None
    digest: Optional[str] = None


class ModelList(BaseModel):
    """Response body of /api/tags."""
    model_config = ConfigDict(frozen=True)

    models: Optional[List[ModelResponse]] = None


class ShowRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class ShowResponse(BaseModel):
    """Modelfile, template, parameters, license and system prompt of a model."""
    model_config = ConfigDict(frozen=True)

    license: Optional[str] = None
    modelfile: Optional[str] = None
    parameters: Optional[str] = None
    template: Optional[str] = None
    system: Optional[str] = None


class CopyRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    destination: str


class DeleteRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
