"""Tests for StorageSettings resolution, defaults and cache invalidation."""

import pytest

from objectstore.core.config import (
    StorageSettings,
    get_storage_settings,
    reset_storage_config_cache,
)
from objectstore.infrastructure.exceptions import StorageConfigurationError

_REQUIRED = {
    "STORAGE_BUCKET_NAME": "assets",
    "STORAGE_ACCESS_KEY_ID": "AKIAENV",
    "STORAGE_SECRET_ACCESS_KEY": "env-secret",
    "STORAGE_PUBLIC_BASE_URL": "https://cdn.example.com",
}


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name, value in _REQUIRED.items():
        monkeypatch.setenv(name, value)


class TestRequiredVariables:
    """Missing required variables fail with the variable name."""

    @pytest.mark.parametrize("missing", list(_REQUIRED))
    def test_missing_variable_named(
        self, monkeypatch: pytest.MonkeyPatch, required_env: None, missing: str
    ) -> None:
        monkeypatch.delenv(missing)
        with pytest.raises(StorageConfigurationError) as exc_info:
            get_storage_settings()
        assert exc_info.value.variable == missing
        assert missing in exc_info.value.message
        assert exc_info.value.error_code == "STORAGE_CONFIGURATION_ERROR"

    def test_empty_value_counts_as_missing(
        self, monkeypatch: pytest.MonkeyPatch, required_env: None
    ) -> None:
        monkeypatch.setenv("STORAGE_SECRET_ACCESS_KEY", "")
        with pytest.raises(StorageConfigurationError, match="STORAGE_SECRET_ACCESS_KEY"):
            get_storage_settings()

    def test_first_missing_reported(self) -> None:
        with pytest.raises(StorageConfigurationError) as exc_info:
            get_storage_settings()
        assert exc_info.value.variable == "STORAGE_BUCKET_NAME"


class TestDefaults:
    def test_region_and_endpoint_defaults(self, required_env: None) -> None:
        s = get_storage_settings()
        assert s.bucket_name == "assets"
        assert s.region == "auto"
        assert s.endpoint == "https://s3.auto.amazonaws.com"
        assert s.force_path_style is False
        assert s.session_token is None
        assert s.secret_access_key.get_secret_value() == "env-secret"

    def test_endpoint_follows_region(
        self, monkeypatch: pytest.MonkeyPatch, required_env: None
    ) -> None:
        monkeypatch.setenv("STORAGE_REGION", "eu-west-1")
        assert get_storage_settings().endpoint == "https://s3.eu-west-1.amazonaws.com"

    def test_empty_region_means_auto(
        self, monkeypatch: pytest.MonkeyPatch, required_env: None
    ) -> None:
        monkeypatch.setenv("STORAGE_REGION", "")
        assert get_storage_settings().region == "auto"

    def test_explicit_endpoint_and_session_token(
        self, monkeypatch: pytest.MonkeyPatch, required_env: None
    ) -> None:
        monkeypatch.setenv("STORAGE_ENDPOINT", "https://acct.r2.cloudflarestorage.com")
        monkeypatch.setenv("STORAGE_SESSION_TOKEN", "tok")
        s = get_storage_settings()
        assert s.endpoint == "https://acct.r2.cloudflarestorage.com"
        assert s.session_token is not None
        assert s.session_token.get_secret_value() == "tok"


class TestForcePathStyle:
    """Only the exact string "true" enables path-style addressing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("false", False), ("True", False), ("1", False), ("yes", False), ("", False)],
    )
    def test_env_parsing(
        self,
        monkeypatch: pytest.MonkeyPatch,
        required_env: None,
        raw: str,
        expected: bool,
    ) -> None:
        monkeypatch.setenv("STORAGE_FORCE_PATH_STYLE", raw)
        assert get_storage_settings().force_path_style is expected


class TestCache:
    def test_cached_until_reset(
        self, monkeypatch: pytest.MonkeyPatch, required_env: None
    ) -> None:
        first = get_storage_settings()
        monkeypatch.setenv("STORAGE_BUCKET_NAME", "other")
        assert get_storage_settings() is first
        assert get_storage_settings().bucket_name == "assets"

        reset_storage_config_cache()
        second = get_storage_settings()
        assert second is not first
        assert second.bucket_name == "other"

    def test_reset_after_env_removed_fails(
        self, monkeypatch: pytest.MonkeyPatch, required_env: None
    ) -> None:
        get_storage_settings()
        monkeypatch.delenv("STORAGE_PUBLIC_BASE_URL")
        get_storage_settings()  # still cached
        reset_storage_config_cache()
        with pytest.raises(StorageConfigurationError, match="STORAGE_PUBLIC_BASE_URL"):
            get_storage_settings()


def test_direct_construction_ignores_environment(required_env: None) -> None:
    """Injected settings use keyword values over STORAGE_* variables."""
    s = StorageSettings(
        _env_file=None,
        bucket_name="injected",
        access_key_id="AKIA",
        secret_access_key="s",
        public_base_url="https://pub.example.com",
        force_path_style=True,
    )
    assert s.bucket_name == "injected"
    assert s.force_path_style is True
