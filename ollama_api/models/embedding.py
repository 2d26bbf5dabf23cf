"""Embedding models."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from .completion import Options


class EmbeddingRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    prompt: str
    options: Optional[Options] = None


class EmbeddingResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    embedding: List[float] = []
