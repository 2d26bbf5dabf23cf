"""Pull and push models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class PullPushRequest(BaseModel):
    """Request body for /api/pull and /api/push.

    Credentials travel in the body; the server does not read HTTP auth
    headers for these endpoints.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    insecure: Optional[bool] = None
    username: Optional[str] = None
    password: Optional[str] = None
    stream: Optional[bool] = None


class ProgressResponse(BaseModel):
    """Progress of a pull or push.

    ``total`` and ``completed`` are cumulative for the layer named by
    ``digest``. ``completed`` is missing until the first byte of a layer
    has moved.
    """
    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None
    digest: Optional[str] = None
    total: Optional[int] = None
    completed: Optional[int] = None
