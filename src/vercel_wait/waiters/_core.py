"""Core business logic for the deployment and URL waiters.

Each waiter is a bounded, fixed-interval poll loop. A single attempt is a
*step* that returns a ``Done``, ``Retry`` or ``Abort`` outcome; ``_poll``
owns the attempt counter, the logging and the sleep between attempts.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from .._http import (
    DEFAULT_TIMEOUT,
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    create_headers_async_client,
    create_headers_client,
    iter_coroutine,
)
from ..errors import (
    MissingTargetUrlError,
    MissingTokenError,
    PasswordExchangeError,
    WaitCancelledError,
    WaitTimeoutError,
)
from ..github import AsyncGitHubClient, Deployment, DeploymentStatus, GitHubAPIError, SyncGitHubClient
from ..github._core import _BaseGitHubClient
from ..protection import (
    AsyncProtectionClient,
    SyncProtectionClient,
    protection_cookies,
    protection_headers,
)
from ..protection._core import _BaseProtectionClient
from ..retry import (
    Abort,
    CancelEvent,
    Done,
    PollOutcome,
    Retry,
    RetryPolicy,
    SleepFn,
    await_if_necessary,
    blocking_sleep,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

DEFAULT_ACTOR = "vercel[bot]"
DEFAULT_START_POLICY = RetryPolicy(max_timeout=20)
DEFAULT_POLICY = RetryPolicy()

# GitHub API failures, undecodable bodies and unexpected payload shapes
# (pydantic's ValidationError is a ValueError) are all transient.
_FETCH_ERRORS = (httpx.HTTPError, GitHubAPIError, ValueError)


class _BaseWaiter:
    """
    Base class containing the shared async waiting logic.

    Subclasses provide the GitHub client, the sleep function, the
    transport used to probe the preview host and the password exchange client.
    """

    _github: _BaseGitHubClient
    _sleep_fn: SleepFn
    _timeout: float

    def _open_probe(self, headers: dict[str, str], cookies: httpx.Cookies) -> BaseTransport:
        raise NotImplementedError

    def _open_protection(self) -> _BaseProtectionClient:
        raise NotImplementedError

    async def _poll(
        self,
        step: Callable[[], Awaitable[PollOutcome[_T]]],
        *,
        policy: RetryPolicy,
        label: str,
        cancel_event: CancelEvent | None = None,
    ) -> _T | None:
        """Run ``step`` until it is done, aborts, or the budget runs out.

        Returns ``None`` when every attempt asked for a retry.
        """
        iterations = policy.iterations
        for attempt in range(iterations):
            if cancel_event is not None and cancel_event.is_set():
                raise WaitCancelledError(f"Cancelled while waiting for {label}")

            outcome = await step()
            if isinstance(outcome, Done):
                return outcome.value
            if isinstance(outcome, Abort):
                raise outcome.error

            logger.info("%s, retrying (attempt %d / %d)", outcome.reason, attempt + 1, iterations)
            if outcome.detail:
                if outcome.quiet:
                    logger.debug(outcome.detail)
                else:
                    logger.info(outcome.detail)

            if attempt + 1 < iterations:
                await await_if_necessary(self._sleep_fn(policy.interval_seconds))

        return None

    async def _wait_for_deployment_to_start(
        self,
        *,
        owner: str,
        repo: str,
        sha: str,
        environment: str | None = None,
        actor_name: str = DEFAULT_ACTOR,
        policy: RetryPolicy = DEFAULT_START_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> Deployment | None:
        """Wait until the API lists a deployment of ``sha`` created by ``actor_name``.

        Covers the race where this run starts before the actor has created
        its deployment. Returns ``None`` if none shows up within the budget.
        """

        async def step() -> PollOutcome[Deployment]:
            try:
                deployments = await self._github._list_deployments(
                    owner=owner, repo=repo, sha=sha, environment=environment
                )
            except _FETCH_ERRORS as exc:
                return Retry("Error while fetching deployments", detail=str(exc))

            for deployment in deployments:
                if deployment.creator_login == actor_name:
                    return Done(deployment)
            return Retry(f"Could not find any deployments for actor {actor_name}")

        return await self._poll(
            step, policy=policy, label="deployment to start", cancel_event=cancel_event
        )

    async def _wait_for_status(
        self,
        *,
        owner: str,
        repo: str,
        deployment_id: int,
        allow_inactive: bool = False,
        policy: RetryPolicy = DEFAULT_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> DeploymentStatus:
        """Wait until the newest status of a deployment is ``success``.

        ``inactive`` also counts when ``allow_inactive`` is set. Every other
        state, ``error`` and ``failure`` included, is retried.

        Raises:
            MissingTargetUrlError: The terminal status has no target URL.
            WaitTimeoutError: The budget ran out.
        """

        async def step() -> PollOutcome[DeploymentStatus]:
            unavailable = "Deployment unavailable or not successful"
            try:
                statuses = await self._github._list_deployment_statuses(
                    owner=owner, repo=repo, deployment_id=deployment_id
                )
            except _FETCH_ERRORS as exc:
                return Retry(unavailable, detail=str(exc))

            if not statuses:
                return Retry(unavailable, detail="No status was available")

            status = statuses[0]
            terminal = status.state == "success" or (allow_inactive and status.state == "inactive")
            if not terminal:
                return Retry(
                    unavailable,
                    detail=f'No status with state "success" was available (latest is "{status.state}")',
                    quiet=True,
                )
            if not status.target_url:
                return Abort(MissingTargetUrlError("no target_url found in the status check"))
            return Done(status)

        status = await self._poll(
            step, policy=policy, label="deployment status", cancel_event=cancel_event
        )
        if status is None:
            raise WaitTimeoutError(
                "Timeout reached: Unable to wait for an deployment to be successful"
            )
        return status

    async def _wait_for_vercel_jwt(
        self,
        *,
        url: str,
        password: str,
        policy: RetryPolicy = DEFAULT_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> str:
        """Exchange the deployment password for a ``_vercel_jwt`` token.

        Failed or rejected requests are retried within the budget.

        Raises:
            MissingTokenError: An accepted response carried no JWT cookie.
            WaitTimeoutError: The budget ran out.
        """
        protection = self._open_protection()

        async def step() -> PollOutcome[str]:
            try:
                token = await protection._get_vercel_jwt(url=url, password=password)
            except MissingTokenError as exc:
                return Abort(exc)
            except PasswordExchangeError as exc:
                return Retry(exc.message)
            return Done(token)

        try:
            token = await self._poll(
                step, policy=policy, label="vercel JWT", cancel_event=cancel_event
            )
        finally:
            await protection._close()

        if token is None:
            raise WaitTimeoutError(f"Timeout reached: Unable to connect to {url}")
        return token

    async def _wait_for_url(
        self,
        *,
        url: str,
        path: str = "/",
        policy: RetryPolicy = DEFAULT_POLICY,
        vercel_jwt: str | None = None,
        bypass_header: str | None = None,
        cancel_event: CancelEvent | None = None,
    ) -> httpx.Response:
        """Wait until ``path`` under ``url`` answers without an error status.

        Raises:
            WaitTimeoutError: The budget ran out.
        """
        check_url = str(httpx.URL(url).join(path))
        headers = protection_headers(bypass_header=bypass_header)
        cookies = protection_cookies(check_url, vercel_jwt=vercel_jwt, bypass_header=bypass_header)
        probe = self._open_probe(headers, cookies)

        async def step() -> PollOutcome[httpx.Response]:
            try:
                resp = await probe.send("GET", check_url, follow_redirects=True)
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                return Retry(f"GET status: {exc.response.status_code}")
            except httpx.TransportError as exc:
                return Retry(
                    "GET error. A request was made, but no response was received",
                    detail=str(exc),
                )
            except httpx.HTTPError as exc:
                return Retry("GET error", detail=str(exc))

            logger.info("Received success status code")
            return Done(resp)

        try:
            resp = await self._poll(step, policy=policy, label=url, cancel_event=cancel_event)
        finally:
            await probe.close()

        if resp is None:
            raise WaitTimeoutError(f"Timeout reached: Unable to connect to {url}")
        return resp


class SyncWaiter(_BaseWaiter):
    """Blocking waiters driven by ``time.sleep``."""

    def __init__(
        self,
        github: SyncGitHubClient,
        *,
        sleep_fn: SleepFn = blocking_sleep,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._github = github
        self._sleep_fn = sleep_fn
        self._timeout = timeout

    def _open_probe(self, headers: dict[str, str], cookies: httpx.Cookies) -> BaseTransport:
        return BlockingTransport(
            create_headers_client(headers, timeout=self._timeout, cookies=cookies)
        )

    def _open_protection(self) -> _BaseProtectionClient:
        return SyncProtectionClient(timeout=self._timeout)

    def wait_for_deployment_to_start(
        self,
        *,
        owner: str,
        repo: str,
        sha: str,
        environment: str | None = None,
        actor_name: str = DEFAULT_ACTOR,
        policy: RetryPolicy = DEFAULT_START_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> Deployment | None:
        return iter_coroutine(
            self._wait_for_deployment_to_start(
                owner=owner,
                repo=repo,
                sha=sha,
                environment=environment,
                actor_name=actor_name,
                policy=policy,
                cancel_event=cancel_event,
            )
        )

    def wait_for_status(
        self,
        *,
        owner: str,
        repo: str,
        deployment_id: int,
        allow_inactive: bool = False,
        policy: RetryPolicy = DEFAULT_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> DeploymentStatus:
        return iter_coroutine(
            self._wait_for_status(
                owner=owner,
                repo=repo,
                deployment_id=deployment_id,
                allow_inactive=allow_inactive,
                policy=policy,
                cancel_event=cancel_event,
            )
        )

    def wait_for_vercel_jwt(
        self,
        *,
        url: str,
        password: str,
        policy: RetryPolicy = DEFAULT_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> str:
        return iter_coroutine(
            self._wait_for_vercel_jwt(
                url=url, password=password, policy=policy, cancel_event=cancel_event
            )
        )

    def wait_for_url(
        self,
        *,
        url: str,
        path: str = "/",
        policy: RetryPolicy = DEFAULT_POLICY,
        vercel_jwt: str | None = None,
        bypass_header: str | None = None,
        cancel_event: CancelEvent | None = None,
    ) -> httpx.Response:
        return iter_coroutine(
            self._wait_for_url(
                url=url,
                path=path,
                policy=policy,
                vercel_jwt=vercel_jwt,
                bypass_header=bypass_header,
                cancel_event=cancel_event,
            )
        )


class AsyncWaiter(_BaseWaiter):
    """Asyncio waiters driven by ``asyncio.sleep``."""

    def __init__(
        self,
        github: AsyncGitHubClient,
        *,
        sleep_fn: SleepFn = asyncio.sleep,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._github = github
        self._sleep_fn = sleep_fn
        self._timeout = timeout

    def _open_probe(self, headers: dict[str, str], cookies: httpx.Cookies) -> BaseTransport:
        return AsyncTransport(
            create_headers_async_client(headers, timeout=self._timeout, cookies=cookies)
        )

    def _open_protection(self) -> _BaseProtectionClient:
        return AsyncProtectionClient(timeout=self._timeout)

    async def wait_for_deployment_to_start(
        self,
        *,
        owner: str,
        repo: str,
        sha: str,
        environment: str | None = None,
        actor_name: str = DEFAULT_ACTOR,
        policy: RetryPolicy = DEFAULT_START_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> Deployment | None:
        return await self._wait_for_deployment_to_start(
            owner=owner,
            repo=repo,
            sha=sha,
            environment=environment,
            actor_name=actor_name,
            policy=policy,
            cancel_event=cancel_event,
        )

    async def wait_for_status(
        self,
        *,
        owner: str,
        repo: str,
        deployment_id: int,
        allow_inactive: bool = False,
        policy: RetryPolicy = DEFAULT_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> DeploymentStatus:
        return await self._wait_for_status(
            owner=owner,
            repo=repo,
            deployment_id=deployment_id,
            allow_inactive=allow_inactive,
            policy=policy,
            cancel_event=cancel_event,
        )

    async def wait_for_vercel_jwt(
        self,
        *,
        url: str,
        password: str,
        policy: RetryPolicy = DEFAULT_POLICY,
        cancel_event: CancelEvent | None = None,
    ) -> str:
        return await self._wait_for_vercel_jwt(
            url=url, password=password, policy=policy, cancel_event=cancel_event
        )

    async def wait_for_url(
        self,
        *,
        url: str,
        path: str = "/",
        policy: RetryPolicy = DEFAULT_POLICY,
        vercel_jwt: str | None = None,
        bypass_header: str | None = None,
        cancel_event: CancelEvent | None = None,
    ) -> httpx.Response:
        return await self._wait_for_url(
            url=url,
            path=path,
            policy=policy,
            vercel_jwt=vercel_jwt,
            bypass_header=bypass_header,
            cancel_event=cancel_event,
        )


__all__ = [
    "DEFAULT_ACTOR",
    "SyncWaiter",
    "AsyncWaiter",
]
