"""Tests for X-API-KEY verification."""

from unittest.mock import patch

import pytest
from fastapi import HTTPException

from govhub.api.auth import verify_api_key
from govhub.config.settings import Settings


def _settings(api_keys):
    return Settings(api_keys=api_keys)


@pytest.mark.asyncio
async def test_dev_mode_without_keys():
    with patch("govhub.api.auth.get_settings", return_value=_settings(None)):
        assert await verify_api_key(None) == "dev-mode"


@pytest.mark.asyncio
async def test_valid_key():
    with patch("govhub.api.auth.get_settings", return_value=_settings("k1, k2")):
        assert await verify_api_key("k2") == "k2"


@pytest.mark.asyncio
async def test_missing_key():
    with patch("govhub.api.auth.get_settings", return_value=_settings("k1")):
        with pytest.raises(HTTPException) as exc_info:
            await verify_api_key(None)

    assert exc_info.value.status_code == 401
    assert "Missing API key" in exc_info.value.detail


@pytest.mark.asyncio
async def test_invalid_key():
    with patch("govhub.api.auth.get_settings", return_value=_settings("k1")):
        with pytest.raises(HTTPException) as exc_info:
            await verify_api_key("wrong")

    assert exc_info.value.detail == "Invalid API key"
