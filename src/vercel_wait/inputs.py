from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass
from typing import Mapping

from .errors import InvalidInputError, MissingInputError
from .retry import DEFAULT_CHECK_INTERVAL_MS, DEFAULT_MAX_TIMEOUT, RetryPolicy

__all__ = ["ActionInputs", "get_inputs"]

DEFAULT_PATH = "/"
DEFAULT_CHECK_INTERVAL = DEFAULT_CHECK_INTERVAL_MS / 1000

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


@dataclass(frozen=True)
class ActionInputs:
    token: str
    vercel_password: str | None = None
    protection_bypass_header: str | None = None
    environment: str | None = None
    max_timeout: float = DEFAULT_MAX_TIMEOUT
    allow_inactive: bool = False
    path: str = DEFAULT_PATH
    check_interval: float = DEFAULT_CHECK_INTERVAL

    @property
    def check_interval_ms(self) -> float:
        return self.check_interval * 1000

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(max_timeout=self.max_timeout, check_interval_ms=self.check_interval_ms)

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        for secret in ("token", "vercel_password", "protection_bypass_header"):
            if data[secret]:
                data[secret] = "***"
        return data


def _input_key(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def _get(env: Mapping[str, str], name: str) -> str | None:
    value = env.get(_input_key(name), "").strip()
    if value == "":
        return None
    return value


def _get_number(env: Mapping[str, str], name: str, default: float) -> float:
    # Anything but a finite positive number falls back to the default
    raw = _get(env, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return value


def _get_bool(env: Mapping[str, str], name: str) -> bool:
    raw = _get(env, name)
    if raw is None or raw in _FALSE_VALUES:
        return False
    if raw in _TRUE_VALUES:
        return True
    raise InvalidInputError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def get_inputs(env: Mapping[str, str] | None = None) -> ActionInputs:
    """Read the action inputs the way GitHub Actions exposes them.

    Each input ``name`` is read from ``INPUT_<NAME>``. Empty strings are
    treated as unset.

    Raises:
        MissingInputError: ``token`` was not supplied.
        InvalidInputError: ``allow_inactive`` is not a YAML boolean.
    """
    if env is None:
        env = os.environ

    token = _get(env, "token")
    if not token:
        raise MissingInputError("Input required and not supplied: token")

    return ActionInputs(
        token=token,
        vercel_password=_get(env, "vercel_password"),
        protection_bypass_header=_get(env, "vercel_protection_bypass_header"),
        environment=_get(env, "environment"),
        max_timeout=_get_number(env, "max_timeout", DEFAULT_MAX_TIMEOUT),
        allow_inactive=_get_bool(env, "allow_inactive"),
        path=_get(env, "path") or DEFAULT_PATH,
        check_interval=_get_number(env, "check_interval", DEFAULT_CHECK_INTERVAL),
    )
