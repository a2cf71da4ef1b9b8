"""Settings for the fetch pipeline.

Values are read from environment variables (or a local ``.env`` file) once at
import time and shared through the module-level ``settings`` instance.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration for logging, tracing and transport."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    PYTHON_LOG_LEVEL: str = "INFO"

    # Request logging middleware
    REQUEST_LOGGING_ENABLED: bool = True
    REQUEST_LOG_HEADERS: bool = False
    REQUEST_LOG_BODY: bool = False
    REQUEST_LOG_BODY_MAX_SIZE: int = 4096

    # Trace middleware
    TRACE_HEADER_NAME: str = "X-Trace-ID"
    CLIENT_NAME: str = "fetch-pipeline"
    CLIENT_VERSION: str = "0.1.0"

    # Default httpx transport, seconds
    DEFAULT_TIMEOUT: float = 30.0


settings = Settings()
