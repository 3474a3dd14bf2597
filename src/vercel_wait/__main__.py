"""CLI entry point: ``python -m vercel_wait`` or ``vercel-wait``."""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from .action import run


def _configure_logging() -> None:
    debug = os.getenv("RUNNER_DEBUG") == "1"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> int:
    """Wait for the Vercel preview of the current commit.

    Inputs come from ``INPUT_*`` variables and the run context from
    ``GITHUB_*`` variables; a ``.env`` file in the working directory fills in
    whatever the environment does not set, for local runs.

    Returns:
        Exit code (0 when the preview is up, 1 otherwise).
    """
    load_dotenv()
    _configure_logging()
    result = run()
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
