#!/usr/bin/env python3
"""
Fetch a _vercel_jwt for a password protected preview and probe a path with it.

Requirements:
- PREVIEW_URL: the deployment URL
- VERCEL_PASSWORD: the deployment's protection password

Usage:
    python examples/password_protected_preview.py /api/health
"""

import logging
import os
import sys

from dotenv import load_dotenv

from vercel_wait import ActionError, RetryPolicy, SyncWaiter
from vercel_wait.github import SyncGitHubClient

load_dotenv()
logging.basicConfig(level=logging.INFO, format="%(message)s")


def main() -> int:
    url = os.environ["PREVIEW_URL"]
    path = sys.argv[1] if len(sys.argv) > 1 else "/"

    policy = RetryPolicy(max_timeout=30)

    # The GitHub client is not used here, but the waiter needs one
    with SyncGitHubClient(token=os.getenv("GITHUB_TOKEN", "unused")) as github:
        waiter = SyncWaiter(github)
        try:
            jwt = waiter.wait_for_vercel_jwt(
                url=url, password=os.environ["VERCEL_PASSWORD"], policy=policy
            )
            print(f"got _vercel_jwt ({len(jwt)} chars)")
            resp = waiter.wait_for_url(url=url, path=path, vercel_jwt=jwt, policy=policy)
        except ActionError as e:
            print(e, file=sys.stderr)
            return 1
    print(f"{resp.request.url} -> {resp.status_code}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
