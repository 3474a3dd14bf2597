"""Wait for a Vercel preview deployment from a GitHub Actions run."""

from .action import ActionResult, run, run_async
from .errors import (
    ActionError,
    DeploymentNotFoundError,
    InvalidInputError,
    MissingInputError,
    MissingTargetUrlError,
    MissingTokenError,
    PasswordExchangeError,
    ShaResolutionError,
    WaitCancelledError,
    WaitTimeoutError,
)
from .inputs import ActionInputs, get_inputs
from .context import GitHubContext, get_context
from .retry import RetryPolicy, calculate_iterations
from .waiters import AsyncWaiter, SyncWaiter

__all__ = [
    "run",
    "run_async",
    "ActionResult",
    "ActionInputs",
    "get_inputs",
    "GitHubContext",
    "get_context",
    "RetryPolicy",
    "calculate_iterations",
    "SyncWaiter",
    "AsyncWaiter",
    "ActionError",
    "DeploymentNotFoundError",
    "InvalidInputError",
    "MissingInputError",
    "MissingTargetUrlError",
    "MissingTokenError",
    "PasswordExchangeError",
    "ShaResolutionError",
    "WaitCancelledError",
    "WaitTimeoutError",
]
