"""The workflow run context GitHub Actions exposes through the environment."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from ._http import DEFAULT_GITHUB_API_URL
from .errors import MissingInputError

logger = logging.getLogger(__name__)

__all__ = ["GitHubContext", "get_context"]


@dataclass(frozen=True)
class GitHubContext:
    owner: str
    repo: str
    sha: str | None = None
    api_url: str = DEFAULT_GITHUB_API_URL
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def pull_request(self) -> dict[str, Any] | None:
        pr = self.payload.get("pull_request")
        return pr if isinstance(pr, dict) and pr else None

    @property
    def pull_request_number(self) -> int | None:
        pr = self.pull_request
        number = pr.get("number") if pr else None
        return number if isinstance(number, int) else None


def _load_payload(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    if not os.path.exists(path):
        logger.warning("GITHUB_EVENT_PATH %s does not exist", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, dict) else {}


def get_context(env: Mapping[str, str] | None = None) -> GitHubContext:
    """Build the run context from ``GITHUB_*`` environment variables.

    Raises:
        MissingInputError: ``GITHUB_REPOSITORY`` is unset or not ``owner/repo``.
    """
    if env is None:
        env = os.environ

    repository = env.get("GITHUB_REPOSITORY", "")
    owner, _, repo = repository.partition("/")
    if not owner or not repo:
        raise MissingInputError(
            "context.repo requires a GITHUB_REPOSITORY environment variable like 'owner/repo'"
        )

    return GitHubContext(
        owner=owner,
        repo=repo,
        sha=env.get("GITHUB_SHA") or None,
        api_url=env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL,
        payload=_load_payload(env.get("GITHUB_EVENT_PATH")),
    )
