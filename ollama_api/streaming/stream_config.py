"""Configuration for stream processing."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class StreamConfig:
    """Configuration for stream processing."""
    # None reads chunks as they arrive from the transport
    chunk_size: Optional[int] = None
    max_line_bytes: int = 16 * 1024 * 1024
