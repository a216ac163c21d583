"""Tests for the manual_token provider."""

from __future__ import annotations

from pathlib import Path

import pytest

from azcred.exceptions import ConfigError, InvalidTokenError
from azcred.models import BearerToken
from azcred.plugins.manual_token import MIN_TOKEN_LENGTH, ManualTokenProvider

JWT = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
)


class TestValidation:
    @pytest.mark.parametrize("token", ["", " ", "   \t\n  "])
    def test_empty_token_rejected(self, token: str) -> None:
        with pytest.raises(InvalidTokenError, match="empty"):
            ManualTokenProvider(token)

    @pytest.mark.parametrize("token", ["short", "x" * (MIN_TOKEN_LENGTH - 1)])
    def test_short_token_rejected(self, token: str) -> None:
        with pytest.raises(InvalidTokenError, match="too short"):
            ManualTokenProvider(token)

    def test_minimum_length_accepted(self) -> None:
        ManualTokenProvider("x" * MIN_TOKEN_LENGTH)

    def test_valid_token_accepted(self) -> None:
        assert len(JWT) > 100
        ManualTokenProvider(JWT)

    def test_invalid_token_is_an_auth_error(self) -> None:
        with pytest.raises(InvalidTokenError) as exc_info:
            ManualTokenProvider("")
        assert exc_info.value.exit_code == 3


class TestAcquire:
    def test_method_name(self) -> None:
        assert ManualTokenProvider(JWT).method_name == "Manual Token"

    @pytest.mark.asyncio
    async def test_returns_token_unmodified(self) -> None:
        creds = await ManualTokenProvider(JWT).acquire()
        assert creds == BearerToken(token=JWT)
        assert creds.as_headers() == {"Authorization": f"Bearer {JWT}"}

    @pytest.mark.asyncio
    async def test_acquire_is_repeatable(self) -> None:
        provider = ManualTokenProvider(JWT)
        assert await provider.acquire() == await provider.acquire()

    def test_acquire_blocking(self) -> None:
        assert ManualTokenProvider(JWT).acquire_blocking().token == JWT


class TestFromSource:
    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AZCRED_TEST_TOKEN", JWT)
        provider = ManualTokenProvider.from_source("env:AZCRED_TEST_TOKEN")
        assert provider.acquire_blocking().token == JWT

    def test_from_file_strips_whitespace(self, tmp_path: Path) -> None:
        token_file = tmp_path / "token"
        token_file.write_text(f"{JWT}\n", encoding="utf-8")
        provider = ManualTokenProvider.from_source(f"file:{token_file}")
        assert provider.acquire_blocking().token == JWT

    def test_missing_env_is_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AZCRED_TEST_TOKEN", raising=False)
        with pytest.raises(ConfigError):
            ManualTokenProvider.from_source("env:AZCRED_TEST_TOKEN")

    def test_resolved_token_is_validated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AZCRED_TEST_TOKEN", "tiny")
        with pytest.raises(InvalidTokenError):
            ManualTokenProvider.from_source("env:AZCRED_TEST_TOKEN")
