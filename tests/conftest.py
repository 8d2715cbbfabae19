"""Pytest configuration and fixtures for objectstore.

Storage settings are built directly (no environment) unless a test sets
STORAGE_* variables with monkeypatch; the settings cache is cleared around
every test.
"""

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from objectstore.core.config import StorageSettings, get_settings, reset_storage_config_cache

_STORAGE_ENV = (
    "STORAGE_BUCKET_NAME",
    "STORAGE_ACCESS_KEY_ID",
    "STORAGE_SECRET_ACCESS_KEY",
    "STORAGE_PUBLIC_BASE_URL",
    "STORAGE_REGION",
    "STORAGE_ENDPOINT",
    "STORAGE_FORCE_PATH_STYLE",
    "STORAGE_SESSION_TOKEN",
)

FIXED_NOW = datetime(2024, 3, 1, 12, 30, 45, 123000, tzinfo=UTC)


@pytest.fixture(autouse=True)
def clean_storage_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[None]:
    """Remove STORAGE_* variables and drop cached settings before and after each test."""
    for name in _STORAGE_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)  # no stray .env picked up
    reset_storage_config_cache()
    get_settings.cache_clear()
    yield
    reset_storage_config_cache()
    get_settings.cache_clear()


@pytest.fixture
def make_settings() -> Callable[..., StorageSettings]:
    """Factory for StorageSettings with test defaults; override via kwargs."""

    def _make(**overrides: object) -> StorageSettings:
        values: dict[str, object] = {
            "bucket_name": "bkt",
            "region": "auto",
            "access_key_id": "AKIAEXAMPLE",
            "secret_access_key": "secret",
            "endpoint": "https://s3.example.com",
            "public_base_url": "https://cdn.example.com",
            "force_path_style": False,
        }
        values.update(overrides)
        return StorageSettings(_env_file=None, **values)

    return _make


@pytest.fixture
def storage_settings(make_settings: Callable[..., StorageSettings]) -> StorageSettings:
    return make_settings()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW
