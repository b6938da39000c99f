"""Process execution abstraction layer.

This module provides an interface for running subprocesses, allowing for
better testability and dependency injection.
"""

import subprocess
from abc import ABC, abstractmethod
from typing import Any

from rich.markup import escape

from taskchain.logging import Logger

__all__ = [
    "ProcessRunner",
    "PassthroughProcessRunner",
]


class ProcessRunner(ABC):
    """
    Abstract interface for running subprocess commands.
    """

    @abstractmethod
    def run(self, *args: Any, **kwargs: Any) -> subprocess.CompletedProcess[Any]:
        """
        Run a subprocess command.

        This method signature matches subprocess.run() to allow for direct
        substitution in existing code.

        Args:
        *args: Positional arguments passed to subprocess.run
        **kwargs: Keyword arguments passed to subprocess.run

        Returns:
        subprocess.CompletedProcess: The completed process result
        """
        ...


class PassthroughProcessRunner(ProcessRunner):
    """
    Process runner that directly delegates to subprocess.run.

    The child inherits this process's stdout, stderr and environment, so its
    output reaches the invoker unbuffered and untouched.
    """

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    def run(self, *args: Any, **kwargs: Any) -> subprocess.CompletedProcess[Any]:
        """
        Run a subprocess command via subprocess.run.

        A KeyboardInterrupt while waiting kills the child before propagating.

        Raises:
        subprocess.CalledProcessError: If check=True and process exits non-zero
        """
        command = args[0] if args else kwargs.get("args")
        self._logger.trace(f"Spawning: {escape(str(command))}")
        return subprocess.run(*args, **kwargs)
