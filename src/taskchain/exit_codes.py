"""Exit-code constants used by the CLI layer.

A failing command's own exit status is propagated as-is; these constants cover
everything else.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Every recipe in the chain completed."""

RESOLUTION_ERROR: int = 1
"""Nothing ran: unknown target, dependency cycle, bad recipe file or config."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""


def from_returncode(returncode: int) -> int:
    """Map a subprocess return code to a process exit code.

    subprocess reports death by signal N as -N; shells report it as 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode
