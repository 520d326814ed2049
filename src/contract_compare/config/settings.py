"""Runtime configuration for contract comparison runs.

Relies on pydantic-settings so that environment variables (prefixed with ``COMPARE_``)
can override defaults. A ``.env`` file in the working directory is read as well.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Iterable, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ACCEPTED_SUFFIXES: tuple[str, ...] = (".pdf", ".xlsx", ".xls")


class Settings(BaseSettings):
    """Captures runtime configuration for the comparison CLI and extraction client."""

    extraction_base_url: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the extraction service; files are POSTed to <base>/extract",
    )
    extraction_api_key: Optional[str] = Field(
        default=None, description="Bearer token sent to the extraction service when provided"
    )
    extraction_timeout_s: float = Field(
        default=120.0, description="Per-request timeout for extraction calls in seconds"
    )
    extraction_max_retries: int = Field(
        default=3, description="Retries after the first attempt on retryable extraction failures"
    )
    retry_backoff_base_s: float = Field(
        default=1.0, description="Initial retry delay; doubled for each further attempt"
    )
    retry_backoff_max_s: float = Field(default=30.0, description="Upper bound for a single retry delay")

    max_file_size_mb: float = Field(default=10.0, description="Largest file accepted for extraction")
    accepted_suffixes: Annotated[Tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_ACCEPTED_SUFFIXES,
        description="File suffixes accepted for extraction; comma-separated when provided via env",
    )

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    output_dir: Path = Field(default=Path("data/reports"), description="Directory for JSON reports")

    model_config = SettingsConfigDict(
        env_prefix="COMPARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_dir", "output_dir", mode="before")
    def _expand_dir(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()

    @field_validator("extraction_base_url")
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("accepted_suffixes", mode="before")
    def _parse_suffixes(cls, value: object) -> Tuple[str, ...]:
        if value is None or value == "":
            return ()
        if isinstance(value, str):
            parts: Iterable[str] = value.split(",")
        elif isinstance(value, (list, tuple)):
            parts = (str(item) for item in value)
        else:
            raise TypeError("accepted_suffixes must be provided as a comma-separated string or list")
        suffixes = []
        for part in parts:
            suffix = part.strip().lower()
            if not suffix:
                continue
            suffixes.append(suffix if suffix.startswith(".") else f".{suffix}")
        return tuple(suffixes)

    @field_validator("max_file_size_mb", "extraction_timeout_s")
    def _validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("value must be positive")
        return value

    @field_validator("extraction_max_retries")
    def _validate_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("extraction_max_retries must not be negative")
        return value

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def client_kwargs(self) -> dict[str, object]:
        """Keyword arguments for ExtractionClient derived from these settings."""
        kwargs: dict[str, object] = {
            "base_url": self.extraction_base_url,
            "timeout": self.extraction_timeout_s,
            "max_retries": self.extraction_max_retries,
            "backoff_base": self.retry_backoff_base_s,
            "backoff_max": self.retry_backoff_max_s,
            "max_file_size": self.max_file_size_bytes,
            "accepted_suffixes": self.accepted_suffixes,
        }
        if self.extraction_api_key:
            kwargs["headers"] = {"Authorization": f"Bearer {self.extraction_api_key}"}
        else:
            logger.debug("No extraction API key configured; sending unauthenticated requests")
        return kwargs
