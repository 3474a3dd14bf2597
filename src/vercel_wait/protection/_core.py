"""Core business logic for Vercel password protection.

See https://vercel.com/docs/errors#errors/bypassing-password-protection-programmatically
"""

from __future__ import annotations

import logging

import httpx

from .._http import (
    DEFAULT_TIMEOUT,
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    create_base_async_client,
    create_base_client,
    iter_coroutine,
)
from ..errors import MissingTokenError, PasswordExchangeError

logger = logging.getLogger(__name__)

JWT_COOKIE_NAME = "_vercel_jwt"
PASSWORD_FIELD = "_vercel_password"
BYPASS_HEADER_NAME = "x-vercel-protection-bypass"


def _is_accepted_status(status_code: int) -> bool:
    # Vercel answers with a 303 that carries the _vercel_jwt cookie
    return 200 <= status_code < 307


def _extract_jwt(response: httpx.Response) -> str:
    # Only the name=value pair matters; Domain, Path and Expires are not checked
    for header in response.headers.get_list("set-cookie"):
        name, sep, value = header.split(";", 1)[0].partition("=")
        if sep and name.strip() == JWT_COOKIE_NAME and value.strip():
            return value.strip()

    raise MissingTokenError("no vercel JWT in response")


def protection_headers(*, bypass_header: str | None = None) -> dict[str, str]:
    """Headers that let a request through deployment protection.

    A JWT travels in the cookie jar instead, see ``protection_cookies``.
    """
    if bypass_header:
        return {BYPASS_HEADER_NAME: bypass_header}
    return {}


def protection_cookies(
    url: str,
    *,
    vercel_jwt: str | None = None,
    bypass_header: str | None = None,
) -> httpx.Cookies:
    """A cookie jar holding ``_vercel_jwt`` for the host of ``url``.

    Empty when there is no JWT or when the bypass header is used instead.
    """
    cookies = httpx.Cookies()
    if vercel_jwt and not bypass_header:
        cookies.set(JWT_COOKIE_NAME, vercel_jwt, domain=httpx.URL(url).host)
    return cookies


class _BaseProtectionClient:
    """Base class for the password exchange with shared async implementation."""

    _transport: BaseTransport

    async def _get_vercel_jwt(self, *, url: str, password: str) -> str:
        """Exchange the deployment password for a ``_vercel_jwt`` token."""
        logger.info("requesting vercel JWT")
        try:
            resp = await self._transport.send(
                "POST",
                url,
                data={PASSWORD_FIELD: password},
                follow_redirects=False,
            )
        except httpx.HTTPError as exc:
            raise PasswordExchangeError(f"Failed to request vercel JWT: {exc}", exc) from exc

        if not _is_accepted_status(resp.status_code):
            raise PasswordExchangeError(
                f"Failed to request vercel JWT: {resp.status_code} {resp.reason_phrase}"
            )

        token = _extract_jwt(resp)
        logger.info("received vercel JWT")
        return token

    async def _close(self) -> None:
        await self._transport.close()


class SyncProtectionClient(_BaseProtectionClient):
    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._transport = BlockingTransport(create_base_client(timeout=timeout))

    def close(self) -> None:
        iter_coroutine(self._close())

    def __enter__(self) -> SyncProtectionClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncProtectionClient(_BaseProtectionClient):
    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._transport = AsyncTransport(create_base_async_client(timeout=timeout))

    async def aclose(self) -> None:
        await self._close()

    async def __aenter__(self) -> AsyncProtectionClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


__all__ = [
    "JWT_COOKIE_NAME",
    "BYPASS_HEADER_NAME",
    "protection_headers",
    "protection_cookies",
    "SyncProtectionClient",
    "AsyncProtectionClient",
]
