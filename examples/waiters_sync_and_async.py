import asyncio
import os

from dotenv import load_dotenv

from vercel_wait import AsyncWaiter, RetryPolicy, SyncWaiter
from vercel_wait.github import AsyncGitHubClient, SyncGitHubClient

load_dotenv()

# Requires env vars: GITHUB_TOKEN + GITHUB_REPOSITORY (owner/repo) + GITHUB_SHA
OWNER, REPO = os.environ["GITHUB_REPOSITORY"].split("/", 1)
SHA = os.environ["GITHUB_SHA"]
POLICY = RetryPolicy(max_timeout=120, check_interval_ms=5000)


def sync_demo() -> None:
    with SyncGitHubClient() as github:
        waiter = SyncWaiter(github)
        deployment = waiter.wait_for_deployment_to_start(
            owner=OWNER, repo=REPO, sha=SHA, policy=POLICY
        )
        if deployment is None:
            print("sync: no deployment")
            return
        status = waiter.wait_for_status(
            owner=OWNER, repo=REPO, deployment_id=deployment.id, policy=POLICY
        )
        resp = waiter.wait_for_url(url=status.target_url or "", policy=POLICY)
        print("sync:", status.target_url, resp.status_code)


async def async_demo() -> None:
    async with AsyncGitHubClient() as github:
        waiter = AsyncWaiter(github)
        deployment = await waiter.wait_for_deployment_to_start(
            owner=OWNER, repo=REPO, sha=SHA, policy=POLICY
        )
        if deployment is None:
            print("async: no deployment")
            return
        status = await waiter.wait_for_status(
            owner=OWNER, repo=REPO, deployment_id=deployment.id, policy=POLICY
        )
        resp = await waiter.wait_for_url(url=status.target_url or "", policy=POLICY)
        print("async:", status.target_url, resp.status_code)


if __name__ == "__main__":
    sync_demo()
    asyncio.run(async_demo())
