"""Vercel deployment protection - asynchronous functions."""

from __future__ import annotations

from .._http import DEFAULT_TIMEOUT
from ._core import AsyncProtectionClient


async def get_vercel_jwt(url: str, password: str, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Exchange a deployment password for a ``_vercel_jwt`` token (async)."""
    async with AsyncProtectionClient(timeout=timeout) as client:
        return await client._get_vercel_jwt(url=url, password=password)


__all__ = ["get_vercel_jwt"]
