"""
X-API-KEY authentication for the feedback API.

Keys come from the comma-separated API_KEYS setting. With no keys
configured every request is accepted, which is how local development
and the test suite run.
"""

import secrets

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from govhub.config.settings import get_settings

api_key_header = APIKeyHeader(name="X-API-KEY", auto_error=False)

DEV_MODE_KEY = "dev-mode"


def _matches_any(candidate: str, keys: list[str]) -> bool:
    # Constant-time, and never short-circuits
    matched = False
    for key in keys:
        matched |= secrets.compare_digest(candidate.encode(), key.encode())
    return matched


async def verify_api_key(api_key: str | None = Security(api_key_header)) -> str:
    """
    Check the X-API-KEY header.

    Returns:
        The accepted key, or DEV_MODE_KEY when no keys are configured

    Raises:
        HTTPException: 401 if the header is missing or not a configured key
    """
    valid_keys = get_settings().valid_api_keys
    if not valid_keys:
        return DEV_MODE_KEY

    if api_key is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Provide X-API-KEY header.",
        )
    if not _matches_any(api_key, valid_keys):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
    return api_key
