import pytest

from vercel_wait.errors import InvalidInputError, MissingInputError
from vercel_wait.inputs import ActionInputs, get_inputs


def test_defaults_when_only_token_is_set() -> None:
    inputs = get_inputs({"INPUT_TOKEN": "ghs_abc"})

    assert inputs == ActionInputs(token="ghs_abc")
    assert inputs.max_timeout == 60
    assert inputs.check_interval == 2
    assert inputs.check_interval_ms == 2000
    assert inputs.path == "/"
    assert inputs.allow_inactive is False
    assert inputs.retry_policy.iterations == 30


def test_reads_every_input() -> None:
    inputs = get_inputs(
        {
            "INPUT_TOKEN": "ghs_abc",
            "INPUT_VERCEL_PASSWORD": "hunter2",
            "INPUT_VERCEL_PROTECTION_BYPASS_HEADER": "bypass-secret",
            "INPUT_ENVIRONMENT": "Preview",
            "INPUT_MAX_TIMEOUT": "120",
            "INPUT_ALLOW_INACTIVE": "true",
            "INPUT_PATH": "/api/health",
            "INPUT_CHECK_INTERVAL": "5",
        }
    )

    assert inputs.vercel_password == "hunter2"
    assert inputs.protection_bypass_header == "bypass-secret"
    assert inputs.environment == "Preview"
    assert inputs.max_timeout == 120
    assert inputs.allow_inactive is True
    assert inputs.path == "/api/health"
    assert inputs.check_interval_ms == 5000
    assert inputs.retry_policy.iterations == 24


def test_missing_token_is_fatal() -> None:
    with pytest.raises(MissingInputError, match="Input required and not supplied: token"):
        get_inputs({"INPUT_TOKEN": "  "})


def test_empty_inputs_are_unset() -> None:
    inputs = get_inputs({"INPUT_TOKEN": "t", "INPUT_ENVIRONMENT": "", "INPUT_PATH": ""})
    assert inputs.environment is None
    assert inputs.path == "/"


@pytest.mark.parametrize("raw", ["abc", "0", "-3", "nan", "inf"])
def test_bad_numbers_fall_back_to_defaults(raw: str) -> None:
    inputs = get_inputs({"INPUT_TOKEN": "t", "INPUT_MAX_TIMEOUT": raw, "INPUT_CHECK_INTERVAL": raw})
    assert inputs.max_timeout == 60
    assert inputs.check_interval == 2


@pytest.mark.parametrize("raw,expected", [("True", True), ("TRUE", True), ("False", False), ("", False)])
def test_boolean_inputs(raw: str, expected: bool) -> None:
    assert get_inputs({"INPUT_TOKEN": "t", "INPUT_ALLOW_INACTIVE": raw}).allow_inactive is expected


def test_invalid_boolean_is_fatal() -> None:
    with pytest.raises(InvalidInputError, match="allow_inactive"):
        get_inputs({"INPUT_TOKEN": "t", "INPUT_ALLOW_INACTIVE": "yes"})


def test_to_dict_masks_secrets() -> None:
    data = ActionInputs(token="t", vercel_password="p").to_dict()
    assert data["token"] == "***"
    assert data["vercel_password"] == "***"
    assert data["protection_bypass_header"] is None


def test_reads_os_environ_by_default(mock_env_clear, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INPUT_TOKEN", "from-env")
    assert get_inputs().token == "from-env"
