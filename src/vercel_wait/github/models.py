from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

DeploymentState = Literal[
    "success",
    "inactive",
    "pending",
    "error",
    "failure",
    "queued",
    "in_progress",
]


class Actor(BaseModel):
    """The GitHub user or app that created a resource."""

    login: str


class Deployment(BaseModel):
    """A deployment record from ``GET /repos/{owner}/{repo}/deployments``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    sha: str | None = None
    ref: str | None = None
    environment: str | None = None
    creator: Actor | None = None

    @property
    def creator_login(self) -> str | None:
        return self.creator.login if self.creator else None


class DeploymentStatus(BaseModel):
    """One entry of a deployment's status history."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    state: DeploymentState
    target_url: str | None = None
    environment_url: str | None = None
    description: str | None = None
    created_at: str | None = None


class GitRef(BaseModel):
    ref: str | None = None
    sha: str


class PullRequest(BaseModel):
    """The subset of ``GET /repos/{owner}/{repo}/pulls/{number}`` that is used."""

    model_config = ConfigDict(extra="ignore")

    number: int
    head: GitRef
