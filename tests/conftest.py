"""Shared fixtures for all tests."""

from collections.abc import Generator

import pytest


@pytest.fixture
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear all GitHub Actions environment variables for testing.

    This ensures tests don't accidentally read the inputs or context of a real
    workflow run.
    """
    env_vars_to_clear = [
        # Context
        "GITHUB_TOKEN",
        "GITHUB_REPOSITORY",
        "GITHUB_SHA",
        "GITHUB_EVENT_PATH",
        "GITHUB_API_URL",
        "GITHUB_OUTPUT",
        "RUNNER_DEBUG",
        # Inputs
        "INPUT_TOKEN",
        "INPUT_VERCEL_PASSWORD",
        "INPUT_VERCEL_PROTECTION_BYPASS_HEADER",
        "INPUT_ENVIRONMENT",
        "INPUT_MAX_TIMEOUT",
        "INPUT_ALLOW_INACTIVE",
        "INPUT_PATH",
        "INPUT_CHECK_INTERVAL",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def mock_token() -> str:
    """Mock GitHub token for testing."""
    return "ghs_test_token_123456789"


class SleepRecorder:
    """Blocking sleep stand-in that records the requested durations."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class AsyncSleepRecorder(SleepRecorder):
    async def __call__(self, seconds: float) -> None:  # type: ignore[override]
        self.calls.append(seconds)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def async_sleep() -> AsyncSleepRecorder:
    return AsyncSleepRecorder()

