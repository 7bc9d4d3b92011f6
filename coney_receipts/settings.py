"""Application settings for the receipt extraction service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_AUTO_ACCEPT_CONFIDENCE = 0.85
DEFAULT_REVIEW_CONFIDENCE = 0.5
DEFAULT_MAX_TEXT_LENGTH = 20_000


@dataclass(frozen=True)
class Settings:
    auto_accept_confidence: float
    review_confidence: float
    max_text_length: int
    brand_catalog_path: Optional[Path]
    log_level: str

    @staticmethod
    def _optional_env(name: str) -> Optional[str]:
        value = os.getenv(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    @classmethod
    def _float_env(cls, name: str, default: float) -> float:
        raw = cls._optional_env(name)
        if raw is None:
            return default
        try:
            value = float(raw)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {name} must be a number") from exc
        if not 0.0 <= value <= 1.0:
            raise RuntimeError(f"Environment variable {name} must be between 0 and 1")
        return value

    @classmethod
    def load(cls) -> "Settings":
        _ensure_env_file_loaded()
        auto_accept = cls._float_env("AUTO_ACCEPT_CONFIDENCE", DEFAULT_AUTO_ACCEPT_CONFIDENCE)
        review = cls._float_env("REVIEW_CONFIDENCE", DEFAULT_REVIEW_CONFIDENCE)
        if review > auto_accept:
            raise RuntimeError("REVIEW_CONFIDENCE must not exceed AUTO_ACCEPT_CONFIDENCE")

        raw_length = cls._optional_env("MAX_TEXT_LENGTH")
        if raw_length is None:
            max_text_length = DEFAULT_MAX_TEXT_LENGTH
        else:
            try:
                max_text_length = int(raw_length)
            except ValueError as exc:
                raise RuntimeError("Environment variable MAX_TEXT_LENGTH must be an integer") from exc
            if max_text_length <= 0:
                raise RuntimeError("Environment variable MAX_TEXT_LENGTH must be positive")

        catalog_path = cls._optional_env("BRAND_CATALOG_PATH")

        log_level = (cls._optional_env("LOG_LEVEL") or "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise RuntimeError(f"Unknown LOG_LEVEL {log_level}")

        return cls(
            auto_accept_confidence=auto_accept,
            review_confidence=review,
            max_text_length=max_text_length,
            brand_catalog_path=Path(catalog_path) if catalog_path else None,
            log_level=log_level,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.load()


def reset_settings_state() -> None:
    """Reset cached settings and environment file state (for tests)."""
    global _ENV_FILE_LOADED
    _ENV_FILE_LOADED = False
    get_settings.cache_clear()


_ENV_FILE_LOADED = False


def _ensure_env_file_loaded() -> None:
    global _ENV_FILE_LOADED
    if _ENV_FILE_LOADED:
        return
    candidates = [Path.cwd() / ".env", Path(__file__).resolve().parent.parent / ".env"]
    loaded = False
    for env_path in candidates:
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=False)
            loaded = True
    if not loaded:
        load_dotenv(override=False)
    _ENV_FILE_LOADED = True


__all__ = ["Settings", "get_settings", "reset_settings_state"]
