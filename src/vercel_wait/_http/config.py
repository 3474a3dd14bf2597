"""HTTP configuration for the GitHub API and preview-host clients."""

from __future__ import annotations

import os
from collections.abc import Mapping

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 60.0
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "vercel-wait"


def require_token(token: str | None, env: Mapping[str, str] | None = None) -> str:
    """Resolve the GitHub token from argument or environment, raising if not found."""
    if env is None:
        env = os.environ
    resolved = token or env.get("GITHUB_TOKEN")
    if not resolved:
        raise RuntimeError("Missing GitHub token. Pass token=... or set GITHUB_TOKEN.")
    return resolved


__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_TIMEOUT",
    "GITHUB_API_VERSION",
    "USER_AGENT",
    "require_token",
]
