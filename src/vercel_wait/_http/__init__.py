"""Shared HTTP infrastructure for the GitHub API and preview-host clients."""

from .clients import (
    create_base_async_client,
    create_base_client,
    create_github_async_client,
    create_github_client,
    create_headers_async_client,
    create_headers_client,
)
from .config import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT, require_token
from .iter_coroutine import iter_coroutine
from .transport import AsyncTransport, BaseTransport, BlockingTransport

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_TIMEOUT",
    "require_token",
    "iter_coroutine",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "create_github_client",
    "create_github_async_client",
    "create_headers_client",
    "create_headers_async_client",
    "create_base_client",
    "create_base_async_client",
]
