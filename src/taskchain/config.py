"""
Configuration file parsing for the shell used to run command lines.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import platformdirs
import yaml

from taskchain.logging import Logger

__all__ = [
    "Settings",
    "ConfigError",
    "get_user_config_path",
    "get_machine_config_path",
    "find_project_config",
    "parse_config_file",
    "platform_default_settings",
    "load_settings",
]

PROJECT_CONFIG_NAME = ".taskchain-config.yml"


@dataclass(frozen=True)
class Settings:
    """Shell each command line is handed to, as `[shell, *args, line]`."""

    shell: str
    args: list[str] = field(default_factory=list)

    def command_for(self, line: str) -> list[str]:
        return [self.shell, *self.args, line]


class ConfigError(Exception):
    """
    Raised when a configuration file is invalid.
    """

    pass


def platform_default_settings() -> Settings:
    """
    Get default shell and args for current platform.
    """
    if platform.system() == "Windows":
        return Settings(shell="cmd", args=["/c"])
    return Settings(shell="sh", args=["-cu"])


def get_machine_config_path() -> Path:
    """
    Get the path to the machine-level (system-wide) configuration file.

    Uses platformdirs to determine the appropriate site config directory
    for the current platform, then appends 'taskchain/config.yml'.
    """
    return Path(platformdirs.site_config_dir("taskchain")) / "config.yml"


def get_user_config_path() -> Path:
    """
    Get the path to the user-level configuration file.

    Uses platformdirs to determine the appropriate user config directory
    for the current platform, then appends 'taskchain/config.yml'.
    """
    return Path(platformdirs.user_config_dir("taskchain")) / "config.yml"


def find_project_config(start_dir: Path) -> Optional[Path]:
    """
    Walk up the directory tree from start_dir to find .taskchain-config.yml.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to .taskchain-config.yml if found, None otherwise
    """
    try:
        current = start_dir.resolve()
    except (OSError, RuntimeError):
        # resolve() raises RuntimeError on symlink loops
        return None

    while True:
        config_path = current / PROJECT_CONFIG_NAME
        try:
            if config_path.is_file():
                return config_path
        except OSError:
            pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def parse_config_file(path: Path) -> Optional[Settings]:
    """
    Parse a taskchain configuration file.

    Empty files, and files without a 'shell' key, are valid and return None.

    Args:
        path: Path to the configuration file

    Returns:
        Settings from the file, or None if the file doesn't exist or sets no shell

    Raises:
        ConfigError: If the config file is invalid (malformed YAML, wrong types,
                     unknown keys, or args without a shell)

    Config File Example:

        ```yaml
        shell: bash
        args: ["-eu", "-c"]
        ```
    """
    if not path.exists():
        return None

    try:
        with open(path, "r") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Error reading config file '{path}': {e}") from e

    if not content.strip():
        return None

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in config file '{path}': {e}") from e

    if data is None:
        return None

    if not isinstance(data, dict):
        raise ConfigError(f"Error in config file '{path}': top level must be a mapping")

    unknown = set(data) - {"shell", "args"}
    if unknown:
        raise ConfigError(
            f"Error in config file '{path}': unknown key(s): {', '.join(sorted(unknown))}"
        )

    shell = data.get("shell", "")
    if not isinstance(shell, str):
        raise ConfigError(f"Error in config file '{path}': Field 'shell' must be a string")

    args = data.get("args", [])
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        raise ConfigError(
            f"Error in config file '{path}': Field 'args' must be a list of strings"
        )

    if not shell:
        if args:
            raise ConfigError(
                f"Error in config file '{path}': Field 'args' requires 'shell'"
            )
        return None

    return Settings(shell=shell, args=args)


def load_settings(project_root: Path, logger: Optional[Logger] = None) -> Settings:
    """
    Resolve the effective settings for a project.

    Resolution order:
    1. Project config (.taskchain-config.yml, walking up from project_root)
    2. User config
    3. Machine config
    4. Platform default

    Raises:
        ConfigError: If a config file consulted before a match is invalid
    """
    candidates = [
        find_project_config(project_root),
        get_user_config_path(),
        get_machine_config_path(),
    ]
    for path in candidates:
        if path is None:
            continue
        settings = parse_config_file(path)
        if settings is not None:
            if logger:
                logger.trace(f"Using shell settings from {path}")
            return settings

    return platform_default_settings()
