"""Top-level control flow: resolve the commit, then run the waiters in order."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from ._http import iter_coroutine
from .context import GitHubContext, get_context
from .errors import ActionError, DeploymentNotFoundError, ShaResolutionError
from .github import AsyncGitHubClient, GitHubAPIError, SyncGitHubClient
from .github._core import _BaseGitHubClient
from .inputs import ActionInputs, get_inputs
from .outputs import OutputReporter
from .retry import CancelEvent, SleepFn, blocking_sleep
from .waiters import DEFAULT_ACTOR, AsyncWaiter, SyncWaiter
from .waiters._core import _BaseWaiter

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """What a run produced: the published outputs, or the error that ended it."""

    url: str | None = None
    vercel_jwt: str | None = None
    error: ActionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _resolve_sha(github: _BaseGitHubClient, context: GitHubContext) -> str:
    if context.pull_request is not None:
        number = context.pull_request_number
        if number is None:
            raise ShaResolutionError("No pull request number was found")
        try:
            pr = await github._get_pull_request(
                owner=context.owner, repo=context.repo, number=number
            )
        except (httpx.HTTPError, GitHubAPIError, ValueError) as exc:
            raise ShaResolutionError(
                "Could not get information about the current pull request", exc
            ) from exc
        return pr.head.sha

    if context.sha:
        return context.sha

    raise ShaResolutionError("Unable to determine SHA. Exiting...")


async def _run_action(
    *,
    inputs: ActionInputs,
    context: GitHubContext,
    reporter: OutputReporter,
    github: _BaseGitHubClient,
    waiter: _BaseWaiter,
    cancel_event: CancelEvent | None = None,
) -> ActionResult:
    result = ActionResult()
    policy = inputs.retry_policy
    logger.debug("inputs: %s", inputs.to_dict())
    try:
        sha = await _resolve_sha(github, context)

        deployment = await waiter._wait_for_deployment_to_start(
            owner=context.owner,
            repo=context.repo,
            sha=sha,
            environment=inputs.environment,
            actor_name=DEFAULT_ACTOR,
            policy=policy,
            cancel_event=cancel_event,
        )
        if deployment is None:
            raise DeploymentNotFoundError("no vercel deployment found, exiting...")

        status = await waiter._wait_for_status(
            owner=context.owner,
            repo=context.repo,
            deployment_id=deployment.id,
            allow_inactive=inputs.allow_inactive,
            policy=policy,
            cancel_event=cancel_event,
        )
        target_url = status.target_url or ""
        logger.info("target url » %s", target_url)
        reporter.set_output("url", target_url)
        result.url = target_url

        vercel_jwt: str | None = None
        if inputs.vercel_password:
            vercel_jwt = await waiter._wait_for_vercel_jwt(
                url=target_url,
                password=inputs.vercel_password,
                policy=policy,
                cancel_event=cancel_event,
            )
            reporter.set_output("vercel_jwt", vercel_jwt)
            result.vercel_jwt = vercel_jwt

        logger.info("Waiting for a status code 200 from: %s", target_url)
        await waiter._wait_for_url(
            url=target_url,
            path=inputs.path,
            policy=policy,
            vercel_jwt=vercel_jwt,
            bypass_header=inputs.protection_bypass_header,
            cancel_event=cancel_event,
        )
    except ActionError as exc:
        logger.error(exc.message)
        reporter.set_failed(exc.message)
        result.error = exc
    return result


def _load(
    env: Mapping[str, str],
    inputs: ActionInputs | None,
    context: GitHubContext | None,
) -> tuple[ActionInputs, GitHubContext]:
    return inputs or get_inputs(env), context or get_context(env)


def run(
    *,
    inputs: ActionInputs | None = None,
    context: GitHubContext | None = None,
    reporter: OutputReporter | None = None,
    env: Mapping[str, str] | None = None,
    sleep_fn: SleepFn = blocking_sleep,
    cancel_event: CancelEvent | None = None,
) -> ActionResult:
    """Run the whole wait with blocking I/O.

    ``inputs`` and ``context`` are read from ``env`` (default ``os.environ``)
    when not given. Failures are reported through ``reporter`` and returned
    in the result; they are never raised.
    """
    if env is None:
        env = os.environ
    if reporter is None:
        reporter = OutputReporter(env)
    try:
        inputs, context = _load(env, inputs, context)
    except ActionError as exc:
        reporter.set_failed(exc.message)
        return ActionResult(error=exc)

    with SyncGitHubClient(inputs.token, base_url=context.api_url) as github:
        waiter = SyncWaiter(github, sleep_fn=sleep_fn)
        return iter_coroutine(
            _run_action(
                inputs=inputs,
                context=context,
                reporter=reporter,
                github=github,
                waiter=waiter,
                cancel_event=cancel_event,
            )
        )


async def run_async(
    *,
    inputs: ActionInputs | None = None,
    context: GitHubContext | None = None,
    reporter: OutputReporter | None = None,
    env: Mapping[str, str] | None = None,
    sleep_fn: SleepFn = asyncio.sleep,
    cancel_event: CancelEvent | None = None,
) -> ActionResult:
    """Run the whole wait on the running event loop. See ``run``."""
    if env is None:
        env = os.environ
    if reporter is None:
        reporter = OutputReporter(env)
    try:
        inputs, context = _load(env, inputs, context)
    except ActionError as exc:
        reporter.set_failed(exc.message)
        return ActionResult(error=exc)

    async with AsyncGitHubClient(inputs.token, base_url=context.api_url) as github:
        waiter = AsyncWaiter(github, sleep_fn=sleep_fn)
        return await _run_action(
            inputs=inputs,
            context=context,
            reporter=reporter,
            github=github,
            waiter=waiter,
            cancel_event=cancel_event,
        )


__all__ = ["ActionResult", "run", "run_async"]
