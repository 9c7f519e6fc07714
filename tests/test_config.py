from __future__ import annotations

import pytest
from pydantic import ValidationError

from config import EnlightenSettings, parse_exclude


def test_settings_load_from_env(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "\n".join(
            [
                "ENLIGHTEN_LANGUAGE=SV",
                "ENLIGHTEN_EXCLUDE=38, x, 54",
                "ENLIGHTEN_USE_LOCAL_CACHE=false",
                "ENLIGHTEN_CACHE_PATH=",
            ]
        ),
        encoding="utf-8",
    )

    settings = EnlightenSettings(_env_file=env_file)
    assert settings.language == "sv"
    assert settings.exclude == [38, 54]
    assert settings.use_local_cache is False
    assert settings.cache_path is None


def test_parse_exclude_skips_blanks() -> None:
    assert parse_exclude(None) == []
    assert parse_exclude("1,,2 ,") == [1, 2]


def test_empty_language_is_rejected() -> None:
    with pytest.raises(ValidationError):
        EnlightenSettings(_env_file=None, language="  ")


def test_negative_timeout_is_rejected() -> None:
    with pytest.raises(ValidationError):
        EnlightenSettings(_env_file=None, request_timeout=-1)
