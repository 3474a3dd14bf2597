"""Publishing step outputs and failures through GitHub Actions workflow commands."""

from __future__ import annotations

import os
import sys
import uuid
from typing import Mapping, TextIO

__all__ = ["OutputReporter"]


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


class OutputReporter:
    """Writes step outputs to ``$GITHUB_OUTPUT`` and failures as ``::error::``.

    Outputs set during the run are also kept in ``outputs`` for callers that
    run the action in-process.
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        if env is None:
            env = os.environ
        self._output_path = env.get("GITHUB_OUTPUT") or None
        self._stream = stream
        self.outputs: dict[str, str] = {}
        self.failure: str | None = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _command(self, command: str, message: str, **properties: str) -> None:
        props = ",".join(f"{k}={_escape_property(v)}" for k, v in properties.items())
        prefix = f"::{command} {props}::" if props else f"::{command}::"
        self.stream.write(f"{prefix}{_escape_data(message)}\n")

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        if self._output_path is None:
            self._command("set-output", value, name=name)
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise ValueError("Unexpected input: output name or value contains the delimiter")
        with open(self._output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def set_failed(self, message: str) -> None:
        self.failure = message
        self._command("error", message)
