from __future__ import annotations

import os
from dataclasses import dataclass

from urlsluice.extraction.extractor import DEFAULT_CHUNK_SIZE, DEFAULT_WORKERS, MAX_STREAM_BYTES

DEFAULT_TIMEOUT_SECONDS = 5 * 60


def _get_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _get_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    return int(v)


def _get_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class SluiceSettings:
    # Deadline applied by the CLI when the user gives none
    timeout_seconds: float

    # Pipeline sizing
    workers: int
    chunk_bytes: int
    max_stream_bytes: int

    # Redirect detection
    redirect_config: str | None

    # Logging
    log_json: bool

    @classmethod
    def from_env(cls) -> SluiceSettings:
        return cls(
            timeout_seconds=_get_float("URLSLUICE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            workers=_get_int("URLSLUICE_WORKERS", DEFAULT_WORKERS),
            chunk_bytes=_get_int("URLSLUICE_CHUNK_BYTES", DEFAULT_CHUNK_SIZE),
            max_stream_bytes=_get_int("URLSLUICE_MAX_STREAM_BYTES", MAX_STREAM_BYTES),
            redirect_config=os.getenv("URLSLUICE_REDIRECT_CONFIG") or None,
            log_json=_get_bool("URLSLUICE_LOG_JSON", False),
        )

    def validate(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("URLSLUICE_TIMEOUT_SECONDS must be > 0")
        if self.workers < 1:
            raise ValueError("URLSLUICE_WORKERS must be >= 1")
        if self.chunk_bytes < 1:
            raise ValueError("URLSLUICE_CHUNK_BYTES must be >= 1")
        if self.max_stream_bytes < 1:
            raise ValueError("URLSLUICE_MAX_STREAM_BYTES must be >= 1")
