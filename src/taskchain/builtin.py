"""Built-in recipe table, used when no recipe file is found."""

from __future__ import annotations

import shlex
import sys
from typing import Any

# Same shape as the `tasks` section of a recipe file, in declaration order.
BUILTIN_TASKS: dict[str, dict[str, Any]] = {
    "list": {
        "private": True,
        "desc": "List available recipes",
        "cmd": f"@{shlex.quote(sys.executable)} -m taskchain --list",
    },
    "build-release": {
        "aliases": ["br"],
        "desc": "Build the release binary",
        "cmd": "cargo build --release",
    },
    "test-release": {
        "aliases": ["tr"],
        "deps": ["build-release"],
        "desc": "Test the release build",
        "cmd": "cargo test --release",
    },
    "install": {
        "deps": ["test-release"],
        "desc": "Install the release binary",
        "cmd": "cp -vf ./target/release/tmux-sessionizer ~/.config/tmux-sessionizer",
    },
    "clean-release": {
        "desc": "Remove release build artifacts",
        "cmd": "cargo clean -r",
    },
}
