"""Incremental decoder for newline-delimited JSON bodies."""

import json
import logging
from typing import Any, Dict, Iterator, Optional

from .stream_config import StreamConfig
from ..core.errors import StreamDecodeError

logger = logging.getLogger(__name__)


class NDJSONDecoder:
    """Turns raw body chunks into JSON objects, one per line.

    Chunks may end anywhere, including inside a multi-byte character, so
    bytes are buffered until a newline arrives and only complete lines are
    decoded. At most one incomplete line is held at a time.
    """

    def __init__(self, config: Optional[StreamConfig] = None):
        self.config = config or StreamConfig()
        self.buffer = bytearray()

    def feed(self, data: bytes) -> Iterator[Dict[str, Any]]:
        """Add a chunk and yield every object completed by it, in order."""
        if not data:
            return
        self.buffer.extend(data)

        while True:
            index = self.buffer.find(b"\n")
            if index < 0:
                break
            line = bytes(self.buffer[:index])
            del self.buffer[:index + 1]
            decoded = self._decode_line(line)
            if decoded is not None:
                yield decoded

        if len(self.buffer) > self.config.max_line_bytes:
            size = len(self.buffer)
            self.buffer.clear()
            raise StreamDecodeError(
                f"Stream line exceeds {self.config.max_line_bytes} bytes ({size} buffered)")

    def flush(self) -> Iterator[Dict[str, Any]]:
        """Decode a trailing line that was not terminated by a newline."""
        line = bytes(self.buffer)
        self.buffer.clear()
        decoded = self._decode_line(line)
        if decoded is not None:
            yield decoded

    @staticmethod
    def _decode_line(line: bytes) -> Optional[Dict[str, Any]]:
        line = line.strip()
        if not line:
            return None
        try:
            decoded = json.loads(line)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Error parsing stream line: {e}")
            raise StreamDecodeError(
                f"Malformed stream line: {e}", line=line) from e
        if not isinstance(decoded, dict):
            raise StreamDecodeError(
                f"Expected a JSON object, got {type(decoded).__name__}", line=line)
        return decoded
