"""CLI command implementations and shared utilities."""

from __future__ import annotations

import os
import sys


def _supports_unicode() -> bool:
    """Check whether stdout can render the tick and cross symbols."""
    # Classic Windows console (conhost) mangles them regardless of encoding
    if os.name == "nt" and "WT_SESSION" not in os.environ:
        return False

    encoding = getattr(sys.stdout, "encoding", None)
    if not encoding:
        return False

    try:
        "✓✗".encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return False
    return True


def get_action_success_string() -> str:
    return "✓" if _supports_unicode() else "[ OK ]"


def get_action_failure_string() -> str:
    return "✗" if _supports_unicode() else "[ FAIL ]"
