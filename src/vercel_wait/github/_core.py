"""Core business logic for the GitHub Deployments and Pulls REST API."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import TypeAdapter

from .._http import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_TIMEOUT,
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    create_github_async_client,
    create_github_client,
    iter_coroutine,
    require_token,
)
from .models import Deployment, DeploymentStatus, PullRequest

_DEPLOYMENTS = TypeAdapter(list[Deployment])
_DEPLOYMENT_STATUSES = TypeAdapter(list[DeploymentStatus])


class GitHubAPIError(Exception):
    """Error from the GitHub REST API."""

    def __init__(self, response: httpx.Response, message: str, *, data: Any | None = None):
        super().__init__(message)
        self.response = response
        self.status_code = response.status_code
        self.data = data


def _parse_error_message(response: httpx.Response, operation: str) -> tuple[str, Any | None]:
    """Build an error message from a GitHub error response."""
    parsed: Any | None = None
    message = f"Failed to {operation}: HTTP {response.status_code}"
    try:
        parsed = response.json()
    except ValueError:
        parsed = None

    if isinstance(parsed, dict) and isinstance(parsed.get("message"), str):
        message = f"{message}: {parsed['message']}"
    elif response.text:
        text = response.text
        snippet = text if len(text) <= 500 else text[:500] + "..."
        message = f"{message}: {snippet}"

    return message, parsed


class _BaseGitHubClient:
    """
    Base class containing shared business logic for GitHub API operations.

    All methods are async and use the abstract _transport property for HTTP requests.
    Subclasses must provide a concrete transport implementation.
    """

    _transport: BaseTransport

    async def _get_json(
        self,
        path: str,
        operation: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> Any:
        resp = await self._transport.send("GET", path.lstrip("/"), params=params)
        if not (200 <= resp.status_code < 300):
            message, parsed = _parse_error_message(resp, operation)
            raise GitHubAPIError(resp, message, data=parsed)
        return resp.json()

    async def _list_deployments(
        self,
        *,
        owner: str,
        repo: str,
        sha: str,
        environment: str | None = None,
    ) -> list[Deployment]:
        """List deployments for a commit, optionally filtered by environment."""
        params: dict[str, Any] = {"sha": sha}
        if environment:
            params["environment"] = environment
        data = await self._get_json(
            f"/repos/{owner}/{repo}/deployments", "list deployments", params=params
        )
        return _DEPLOYMENTS.validate_python(data)

    async def _list_deployment_statuses(
        self,
        *,
        owner: str,
        repo: str,
        deployment_id: int,
    ) -> list[DeploymentStatus]:
        """List a deployment's statuses, newest first."""
        data = await self._get_json(
            f"/repos/{owner}/{repo}/deployments/{deployment_id}/statuses",
            "list deployment statuses",
        )
        return _DEPLOYMENT_STATUSES.validate_python(data)

    async def _get_pull_request(self, *, owner: str, repo: str, number: int) -> PullRequest:
        data = await self._get_json(f"/repos/{owner}/{repo}/pulls/{number}", "get pull request")
        return PullRequest.model_validate(data)


class SyncGitHubClient(_BaseGitHubClient):
    """Synchronous client for the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        client = create_github_client(
            require_token(token),
            timeout=timeout or DEFAULT_TIMEOUT,
            base_url=base_url or DEFAULT_GITHUB_API_URL,
        )
        self._transport = BlockingTransport(client)

    def list_deployments(
        self,
        *,
        owner: str,
        repo: str,
        sha: str,
        environment: str | None = None,
    ) -> list[Deployment]:
        return iter_coroutine(
            self._list_deployments(owner=owner, repo=repo, sha=sha, environment=environment)
        )

    def list_deployment_statuses(
        self, *, owner: str, repo: str, deployment_id: int
    ) -> list[DeploymentStatus]:
        return iter_coroutine(
            self._list_deployment_statuses(owner=owner, repo=repo, deployment_id=deployment_id)
        )

    def get_pull_request(self, *, owner: str, repo: str, number: int) -> PullRequest:
        return iter_coroutine(self._get_pull_request(owner=owner, repo=repo, number=number))

    def close(self) -> None:
        iter_coroutine(self._transport.close())

    def __enter__(self) -> SyncGitHubClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncGitHubClient(_BaseGitHubClient):
    """Asynchronous client for the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        client = create_github_async_client(
            require_token(token),
            timeout=timeout or DEFAULT_TIMEOUT,
            base_url=base_url or DEFAULT_GITHUB_API_URL,
        )
        self._transport = AsyncTransport(client)

    async def list_deployments(
        self,
        *,
        owner: str,
        repo: str,
        sha: str,
        environment: str | None = None,
    ) -> list[Deployment]:
        return await self._list_deployments(
            owner=owner, repo=repo, sha=sha, environment=environment
        )

    async def list_deployment_statuses(
        self, *, owner: str, repo: str, deployment_id: int
    ) -> list[DeploymentStatus]:
        return await self._list_deployment_statuses(
            owner=owner, repo=repo, deployment_id=deployment_id
        )

    async def get_pull_request(self, *, owner: str, repo: str, number: int) -> PullRequest:
        return await self._get_pull_request(owner=owner, repo=repo, number=number)

    async def aclose(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncGitHubClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


__all__ = [
    "GitHubAPIError",
    "SyncGitHubClient",
    "AsyncGitHubClient",
]
