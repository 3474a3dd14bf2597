"""GitHub REST API client for deployments and pull requests."""

from ._core import AsyncGitHubClient, GitHubAPIError, SyncGitHubClient
from .models import Actor, Deployment, DeploymentState, DeploymentStatus, GitRef, PullRequest

__all__ = [
    "SyncGitHubClient",
    "AsyncGitHubClient",
    "GitHubAPIError",
    "Actor",
    "Deployment",
    "DeploymentState",
    "DeploymentStatus",
    "GitRef",
    "PullRequest",
]
