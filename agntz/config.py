"""Config file loading and pydantic models for agntz settings."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from agntz import constants
from agntz.core.utils import print_error_message

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "agntz" / "config.toml"
CONFIG_PATH_2 = Path("agntz.toml")


def _replace_dashed_keys_recursive(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively replace dashed keys with underscores in a dictionary."""
    new_dict = {}
    for k, v in d.items():
        new_key = k.replace("-", "_")
        if isinstance(v, dict):
            new_dict[new_key] = _replace_dashed_keys_recursive(v)
        else:
            new_dict[new_key] = v
    return new_dict


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML configuration file and process it for nested structures."""
    # Determine which config path to use
    if config_path_str:
        config_path = Path(config_path_str).expanduser()
    elif CONFIG_PATH.exists():
        config_path = CONFIG_PATH
    elif CONFIG_PATH_2.exists():
        config_path = CONFIG_PATH_2
    else:
        return {}

    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                return _replace_dashed_keys_recursive(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            print_error_message(f"Error parsing config file {config_path}: {e}")
            return {}

    # Report error only if an explicit path was given
    print_error_message(f"Config file not found at {config_path_str}")
    return {}


# --- Pydantic Models for Configuration ---


class Binaries(BaseModel):
    """Executables used for each wrapped tool."""

    model_config = ConfigDict(extra="forbid")

    memory: str = constants.MEMORY_BINARY
    mail: str = constants.MAIL_BINARY
    issues: str = constants.ISSUES_BINARY
    schedule: str = constants.SCHEDULE_BINARY
    search: str = constants.SEARCH_BINARY


class Settings(BaseModel):
    """Settings resolved once per invocation and passed to the commands."""

    binaries: Binaries = Binaries()


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Build settings from a loaded config dict, falling back to defaults on bad values."""
    try:
        return Settings(binaries=Binaries(**config.get("binaries", {})))
    except (ValidationError, TypeError) as e:
        print_error_message(f"Invalid [binaries] section in config: {e}")
        return Settings()
