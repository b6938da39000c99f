"""Test helpers for ProcessRunner mocking."""

import subprocess
from typing import Any

from taskchain.process_runner import ProcessRunner


class MockProcessRunner(ProcessRunner):
    """
    Mock ProcessRunner for testing.

    Records every run() call and returns configurable exit codes. A command
    line containing a key of `exit_codes` gets that key's code; anything else
    gets `default_exit_code`.
    """

    def __init__(self, exit_codes: dict[str, int] | None = None, default_exit_code: int = 0):
        self.exit_codes = exit_codes or {}
        self.default_exit_code = default_exit_code
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def run(self, *args: Any, **kwargs: Any) -> subprocess.CompletedProcess[Any]:
        cmd = args[0] if args else kwargs["args"]
        self.calls.append((cmd, kwargs))

        line = cmd[-1]
        returncode = next(
            (code for fragment, code in self.exit_codes.items() if fragment in line),
            self.default_exit_code,
        )
        return subprocess.CompletedProcess(args=cmd, returncode=returncode)

    @property
    def commands(self) -> list[str]:
        """The command lines dispatched, without the shell prefix."""
        return [cmd[-1] for cmd, _ in self.calls]
