"""Fatal error types.

Every error raised out of a waiter or the orchestrator derives from
``ActionError``; its message is what the run reports as its failure.
Transient poll failures never surface as exceptions.
"""

from __future__ import annotations


class ActionError(Exception):
    """A condition that ends the run."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class MissingInputError(ActionError):
    """A required action input was not supplied."""


class InvalidInputError(ActionError):
    """An action input could not be parsed."""


class ShaResolutionError(ActionError):
    """The commit to wait for could not be determined."""


class DeploymentNotFoundError(ActionError):
    """No deployment by the expected actor appeared within the budget."""


class WaitTimeoutError(ActionError):
    """A waiter exhausted its retry budget."""


class WaitCancelledError(ActionError):
    """A waiter observed its cancellation event."""


class MissingTargetUrlError(ActionError):
    """A successful deployment status carried no target URL."""


class PasswordExchangeError(ActionError):
    """The password protection exchange failed."""


class MissingTokenError(PasswordExchangeError):
    """The password exchange response carried no ``_vercel_jwt`` cookie."""


__all__ = [
    "ActionError",
    "MissingInputError",
    "InvalidInputError",
    "ShaResolutionError",
    "DeploymentNotFoundError",
    "WaitTimeoutError",
    "WaitCancelledError",
    "MissingTargetUrlError",
    "PasswordExchangeError",
    "MissingTokenError",
]
