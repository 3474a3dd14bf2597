import pytest

from vercel_wait.retry import Abort, Done, Retry, RetryPolicy, calculate_iterations
from vercel_wait.errors import WaitTimeoutError


class TestCalculateIterations:
    def test_default_budget(self) -> None:
        assert calculate_iterations(60, 2000) == 30

    def test_zero_timeout_gives_no_attempts(self) -> None:
        assert calculate_iterations(0, 2000) == 0

    def test_rounds_down(self) -> None:
        assert calculate_iterations(5, 2000) == 2

    def test_sub_second_interval(self) -> None:
        assert calculate_iterations(3, 500) == 6


class TestRetryPolicy:
    def test_defaults(self) -> None:
        policy = RetryPolicy()
        assert policy.iterations == 30
        assert policy.interval_seconds == 2.0

    def test_interval_seconds(self) -> None:
        assert RetryPolicy(max_timeout=10, check_interval_ms=250).interval_seconds == 0.25

    def test_rejects_non_positive_interval(self) -> None:
        with pytest.raises(ValueError, match="check_interval_ms"):
            RetryPolicy(check_interval_ms=0)

    def test_rejects_negative_timeout(self) -> None:
        with pytest.raises(ValueError, match="max_timeout"):
            RetryPolicy(max_timeout=-1)


def test_outcomes_carry_their_payload() -> None:
    error = WaitTimeoutError("boom")
    assert Done(42).value == 42
    assert Retry("not yet").detail is None
    assert Retry("not yet").quiet is False
    assert Abort(error).error is error
