from __future__ import annotations

from functools import lru_cache
from typing import List

from loguru import logger
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SOURCE_URL = "https://analytics.makeequal.se/api/words/{language}"


def parse_exclude(raw: str | None) -> List[int]:
    ids: List[int] = []
    if not raw:
        return ids
    for piece in raw.split(","):
        piece = piece.strip()
        if not piece:
            continue
        try:
            ids.append(int(piece))
        except ValueError:
            logger.warning("Ignoring invalid excluded id '{}'.", piece)
    return ids


class EnlightenSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, populate_by_name=True
    )

    language: str = Field(default="en", alias="ENLIGHTEN_LANGUAGE")
    use_local_cache: bool = Field(default=True, alias="ENLIGHTEN_USE_LOCAL_CACHE")
    source_url: str = Field(default=DEFAULT_SOURCE_URL, alias="ENLIGHTEN_SOURCE_URL")
    exclude_ids: str | None = Field(default=None, alias="ENLIGHTEN_EXCLUDE")
    exclude: List[int] = Field(default_factory=list)

    cache_path: str | None = Field(default="data/enlighten.db", alias="ENLIGHTEN_CACHE_PATH")
    cache_namespace: str = Field(default="enlighten_words", alias="ENLIGHTEN_CACHE_NAMESPACE")
    request_timeout: float = Field(default=20.0, alias="ENLIGHTEN_REQUEST_TIMEOUT")
    ready_timeout: float | None = Field(default=None, alias="ENLIGHTEN_READY_TIMEOUT")

    anchor_prefix: str = Field(default="ENLIGHT_WORD", alias="ENLIGHTEN_ANCHOR_PREFIX")
    popup_function: str = Field(default="enlightenPopup", alias="ENLIGHTEN_POPUP_FUNCTION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("language")
    @classmethod
    def normalize_language(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("Language code must not be empty")
        return value

    @field_validator("request_timeout", "ready_timeout")
    @classmethod
    def positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError(f"Timeout must be positive, got {value}")
        return value

    @field_validator("cache_path")
    @classmethod
    def blank_disables_cache(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _build_exclude(self) -> "EnlightenSettings":
        if self.exclude_ids:
            self.exclude = parse_exclude(self.exclude_ids)
        if "{language}" not in self.source_url:
            logger.warning("Source URL '{}' has no {{language}} placeholder.", self.source_url)
        return self


@lru_cache
def get_settings() -> EnlightenSettings:
    try:
        return EnlightenSettings()
    except ValidationError as exc:
        logger.error("Configuration validation failed: {}", exc)
        raise
