"""
Runtime configuration for devconsole.

This module provides:
- load_envs(): load the DEVCONSOLE_* settings from a .env file if they are not
  already present in the environment.
- RuntimeConfig: a frozen dataclass holding the console's runtime settings.
- get_config_dir() / get_data_dir(): XDG locations for config and logs.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import dotenv_values

# Environment variable names for settings
DUMP_DIR_ENV: str = "DEVCONSOLE_DUMP_DIR"
TOGGLE_KEY_ENV: str = "DEVCONSOLE_TOGGLE_KEY"
LOG_LEVEL_ENV: str = "DEVCONSOLE_LOG_LEVEL"
PLUGINS_ENV: str = "DEVCONSOLE_PLUGINS"

DEFAULT_TOGGLE_KEY: str = "c-t"
DEFAULT_LOG_LEVEL: str = "INFO"


def load_envs(env_file: Optional[str] = None) -> None:
    """
    Load the DEVCONSOLE_* settings from a .env file into the process
    environment if they are not already set.
    """
    env_values = dotenv_values(env_file) if env_file else dotenv_values()
    for key in (DUMP_DIR_ENV, TOGGLE_KEY_ENV, LOG_LEVEL_ENV, PLUGINS_ENV):
        if not os.environ.get(key):
            val = env_values.get(key)
            if val:
                os.environ[key] = str(val)


def parse_plugin_list(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma separated plugin list, ignoring blanks."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class RuntimeConfig:
    """
    Holds runtime configuration for the console.

    Attributes:
        dump_dir: Directory the dump command writes relative file names into.
        toggle_key: prompt_toolkit key name that shows/hides the console.
        start_open: Whether the console starts open.
        plugins: Plugin module references to load commands from.
        log_level: Level name for the log file.
        commands: Input lines to run in headless mode (if provided).
    """

    dump_dir: Path = field(default_factory=Path.cwd)
    toggle_key: str = DEFAULT_TOGGLE_KEY
    start_open: bool = True
    plugins: Tuple[str, ...] = ()
    log_level: str = DEFAULT_LOG_LEVEL
    commands: Tuple[str, ...] = ()

    @property
    def headless(self) -> bool:
        return bool(self.commands)


def get_config_dir() -> Path:
    """
    Return the devconsole config directory under XDG_CONFIG_HOME or fallback to ~/.config.
    """
    config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return config_home / "devconsole"


def get_data_dir() -> Path:
    """
    Return the devconsole data directory under XDG_DATA_HOME or fallback to ~/.local/share.
    """
    data_home = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return data_home / "devconsole"
