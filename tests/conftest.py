"""
Pytest configuration and global fixtures.

This module provides shared fixtures used across all tests.
"""

import json
from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from xctwine.utils.config import Settings, get_settings

FIXED_DATE = date(2024, 3, 8)


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch) -> Generator[None, None, None]:
    """Run every test with default settings, unaffected by the environment."""
    for name in (
        "XCTWINE_DEFAULT_FORMAT",
        "XCTWINE_INPUT_EXTENSION",
        "XCTWINE_OUTPUT_EXTENSION",
        "XCTWINE_LOG_LEVEL",
        "XCTWINE_JSON_LOGS",
        "XCTWINE_DEV_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def fixed_date() -> date:
    """Header date used for reproducible output."""
    return FIXED_DATE


@pytest.fixture
def sample_strings() -> dict[str, Any]:
    """A small ``strings`` object in xcstrings layout."""
    return {
        "hello_world": {
            "comment": "Greeting",
            "extractionState": "manual",
            "localizations": {
                "en": {"stringUnit": {"state": "translated", "value": "Hello world"}},
                "es": {"stringUnit": {"state": "translated", "value": "Hola mundo"}},
            },
        },
        "MY_STRING_KEY": {"comment": "This is a really cool key"},
        "settings.title": {},
    }


@pytest.fixture
def write_catalogue(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a catalogue document to a temporary ``.xcstrings`` file."""

    def _write(strings: Any = None, *, name: str = "Localizable.xcstrings", raw: str | None = None):
        path = tmp_path / name
        if raw is not None:
            path.write_text(raw, encoding="utf-8")
        else:
            document = {"sourceLanguage": "en", "strings": strings or {}, "version": "1.0"}
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
