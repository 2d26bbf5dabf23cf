from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


DEFAULT_BASE_URL = "http://localhost:11434"


class OllamaSettings(BaseSettings):
    """Client-wide configuration settings."""
    BASE_URL: str = Field(default=DEFAULT_BASE_URL)
    # Seconds; only applied when the client builds its own httpx client
    REQUEST_TIMEOUT: Optional[float] = Field(default=300.0)
    LOG_LEVEL: str = Field(default="INFO")
    STREAM_MAX_LINE_BYTES: int = Field(default=16 * 1024 * 1024, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create a global settings instance
settings = OllamaSettings()
