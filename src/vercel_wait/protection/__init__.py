"""Vercel deployment protection - synchronous functions."""

from __future__ import annotations

from .._http import DEFAULT_TIMEOUT, iter_coroutine
from ._core import (
    BYPASS_HEADER_NAME,
    JWT_COOKIE_NAME,
    AsyncProtectionClient,
    SyncProtectionClient,
    protection_cookies,
    protection_headers,
)


def get_vercel_jwt(url: str, password: str, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Exchange a deployment password for a ``_vercel_jwt`` token.

    Raises:
        MissingTokenError: The response carried no ``_vercel_jwt`` cookie.
        PasswordExchangeError: The request failed or was rejected.
    """
    with SyncProtectionClient(timeout=timeout) as client:
        return iter_coroutine(client._get_vercel_jwt(url=url, password=password))


__all__ = [
    "JWT_COOKIE_NAME",
    "BYPASS_HEADER_NAME",
    "get_vercel_jwt",
    "protection_headers",
    "protection_cookies",
    "SyncProtectionClient",
    "AsyncProtectionClient",
]
