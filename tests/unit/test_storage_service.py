"""Tests for the upload surface (upload_to_storage, get_public_url, cache reset)."""

from collections.abc import Callable
from datetime import datetime

import httpx
import pytest

from objectstore import (
    StorageConfigurationError,
    StorageSettings,
    UploadRequest,
    get_public_url,
    reset_storage_config_cache,
    upload_to_storage,
)


@pytest.fixture
def storage_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BUCKET_NAME", "envbucket")
    monkeypatch.setenv("STORAGE_ACCESS_KEY_ID", "AKIAENV")
    monkeypatch.setenv("STORAGE_SECRET_ACCESS_KEY", "env-secret")
    monkeypatch.setenv("STORAGE_PUBLIC_BASE_URL", "https://files.example.com/")
    monkeypatch.setenv("STORAGE_ENDPOINT", "https://acct.r2.cloudflarestorage.com")
    monkeypatch.setenv("STORAGE_FORCE_PATH_STYLE", "true")


@pytest.mark.asyncio
async def test_upload_with_injected_settings(
    storage_settings: StorageSettings, fixed_clock: Callable[[], datetime]
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"ETag": '"abc"'})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        result = await upload_to_storage(
            UploadRequest(key="a/b.txt", body="hi", content_type="text/plain"),
            settings=storage_settings,
            http_client=http,
            clock=fixed_clock,
        )
        assert not http.is_closed

    assert result.key == "a/b.txt"
    assert result.url == "https://cdn.example.com/a/b.txt"
    assert result.etag == '"abc"'
    assert seen[0].content == b"hi"


@pytest.mark.asyncio
async def test_upload_uses_environment_settings(storage_env: None) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        result = await upload_to_storage(
            UploadRequest(key="/docs/readme.md", body=b"# hi"), http_client=http
        )

    assert result.url == "https://files.example.com/docs/readme.md"
    assert seen[0].headers["host"] == "acct.r2.cloudflarestorage.com"
    assert seen[0].url.path == "/envbucket/docs/readme.md"
    assert "Credential=AKIAENV/" in seen[0].headers["authorization"]


@pytest.mark.asyncio
async def test_upload_without_configuration_fails() -> None:
    with pytest.raises(StorageConfigurationError, match="STORAGE_BUCKET_NAME"):
        await upload_to_storage(UploadRequest(key="k", body="x"))


def test_get_public_url_from_environment(storage_env: None) -> None:
    assert get_public_url("//a/b.png") == "https://files.example.com/a/b.png"


def test_get_public_url_with_injected_settings(
    make_settings: Callable[..., StorageSettings],
) -> None:
    settings = make_settings(public_base_url="https://cdn.example.com///")
    assert get_public_url("//a/b.png", settings) == "https://cdn.example.com/a/b.png"


def test_reset_picks_up_new_environment(
    monkeypatch: pytest.MonkeyPatch, storage_env: None
) -> None:
    assert get_public_url("k") == "https://files.example.com/k"
    monkeypatch.setenv("STORAGE_PUBLIC_BASE_URL", "https://new.example.com")
    assert get_public_url("k") == "https://files.example.com/k"
    reset_storage_config_cache()
    assert get_public_url("k") == "https://new.example.com/k"
