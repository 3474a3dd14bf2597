"""Client factory functions for creating pre-configured httpx clients."""

from __future__ import annotations

from collections.abc import Callable, Mapping

import httpx

from .config import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT, GITHUB_API_VERSION, USER_AGENT


def _normalize_base_url(base_url: str) -> str:
    """Ensure base_url ends with a trailing slash for consistent URL joining."""
    return base_url.rstrip("/") + "/"


def _create_github_auth_hook(
    token: str,
) -> Callable[[httpx.Request], httpx.Request]:
    """Create a request hook that adds GitHub REST API headers.

    The hook adds:
    - Authorization: Bearer <token>
    - Accept: application/vnd.github+json
    - X-GitHub-Api-Version
    - User-Agent

    Authorization and API version use setdefault so caller-provided headers
    take precedence; accept and user-agent replace httpx's own defaults.
    """

    def hook(request: httpx.Request) -> httpx.Request:
        request.headers.setdefault("authorization", f"Bearer {token}")
        request.headers.setdefault("x-github-api-version", GITHUB_API_VERSION)
        request.headers["accept"] = "application/vnd.github+json"
        request.headers["user-agent"] = USER_AGENT
        return request

    return hook


def _create_static_headers_hook(
    headers: Mapping[str, str],
) -> Callable[[httpx.Request], httpx.Request]:
    """Create a request hook that adds static headers to every request.

    Uses setdefault so per-request headers take precedence.
    """

    def hook(request: httpx.Request) -> httpx.Request:
        for key, value in headers.items():
            request.headers.setdefault(key, value)
        return request

    return hook


def _client_kwargs(timeout: float | None, base_url: str | None) -> dict:
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    kwargs: dict = {"timeout": httpx.Timeout(effective_timeout)}
    if base_url is not None:
        kwargs["base_url"] = _normalize_base_url(base_url)
    return kwargs


def create_github_client(
    token: str,
    timeout: float | None = None,
    base_url: str | None = None,
) -> httpx.Client:
    """Create a sync httpx client for the GitHub REST API.

    Args:
        token: GitHub token sent as a bearer credential.
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
        base_url: API root. Defaults to DEFAULT_GITHUB_API_URL.

    Returns:
        An httpx.Client with the auth event hook configured.
    """
    kwargs = _client_kwargs(timeout, base_url or DEFAULT_GITHUB_API_URL)
    kwargs["event_hooks"] = {"request": [_create_github_auth_hook(token)]}
    return httpx.Client(**kwargs)


def create_github_async_client(
    token: str,
    timeout: float | None = None,
    base_url: str | None = None,
) -> httpx.AsyncClient:
    """Create an async httpx client for the GitHub REST API.

    Args:
        token: GitHub token sent as a bearer credential.
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
        base_url: API root. Defaults to DEFAULT_GITHUB_API_URL.

    Returns:
        An httpx.AsyncClient with the auth event hook configured.
    """
    hook = _create_github_auth_hook(token)

    async def async_hook(request: httpx.Request) -> None:
        hook(request)

    kwargs = _client_kwargs(timeout, base_url or DEFAULT_GITHUB_API_URL)
    kwargs["event_hooks"] = {"request": [async_hook]}
    return httpx.AsyncClient(**kwargs)


def create_headers_client(
    headers: Mapping[str, str],
    timeout: float | None = None,
    cookies: httpx.Cookies | None = None,
) -> httpx.Client:
    """Create a sync httpx client that sends static headers on every request.

    Used for probing the preview host, where protection headers are fixed
    for the whole wait. ``cookies`` seeds the client's cookie jar, which
    httpx merges with any cookies the host sets during the wait.
    """
    hook = _create_static_headers_hook(headers)
    kwargs = _client_kwargs(timeout, None)
    kwargs["event_hooks"] = {"request": [hook]}
    if cookies is not None:
        kwargs["cookies"] = cookies
    return httpx.Client(**kwargs)


def create_headers_async_client(
    headers: Mapping[str, str],
    timeout: float | None = None,
    cookies: httpx.Cookies | None = None,
) -> httpx.AsyncClient:
    """Create an async httpx client that sends static headers on every request."""
    hook = _create_static_headers_hook(headers)

    async def async_hook(request: httpx.Request) -> None:
        hook(request)

    kwargs = _client_kwargs(timeout, None)
    kwargs["event_hooks"] = {"request": [async_hook]}
    if cookies is not None:
        kwargs["cookies"] = cookies
    return httpx.AsyncClient(**kwargs)


def create_base_client(timeout: float | None = None) -> httpx.Client:
    """Create a sync httpx client with basic configuration (no auth)."""
    return httpx.Client(**_client_kwargs(timeout, None))


def create_base_async_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create an async httpx client with basic configuration (no auth)."""
    return httpx.AsyncClient(**_client_kwargs(timeout, None))


__all__ = [
    "create_github_client",
    "create_github_async_client",
    "create_headers_client",
    "create_headers_async_client",
    "create_base_client",
    "create_base_async_client",
]
