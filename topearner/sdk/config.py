"""Configuration management for Top Earner.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - profile: path to profile.yaml (optional, if not colocated)
   - timeout: HTTP timeout in seconds

2. profile.yaml - The job definition
   - endpoints: get_task / submit_task URLs
   - rules: category and year_offset

Config directory resolution:
1. TOP_EARNER_CONFIG_PATH environment variable (if set)
2. ~/.config/top-earner/ (XDG_CONFIG_HOME fallback)

Profile resolution:
1. settings.json "profile" key (if set via CLI)
2. profile.yaml in same config directory

A missing profile is not an error: every value has a default.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml


APP_NAME = "top-earner"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"

DEFAULT_GET_TASK_URL = "https://interview.adpeai.com/api/v2/get-task"
DEFAULT_SUBMIT_TASK_URL = "https://interview.adpeai.com/api/v2/submit-task"
DEFAULT_CATEGORY = "alpha"
DEFAULT_YEAR_OFFSET = 1
DEFAULT_TIMEOUT = 30.0

DEFAULT_PROFILE = {
    "endpoints": {
        "get_task": DEFAULT_GET_TASK_URL,
        "submit_task": DEFAULT_SUBMIT_TASK_URL,
    },
    "rules": {
        "category": DEFAULT_CATEGORY,
        "year_offset": DEFAULT_YEAR_OFFSET,
    },
}


class ProfileNotFoundError(Exception):
    """Raised when a profile is required but none is found."""
    pass


def get_config_dir() -> Path:
    """Directory holding settings.json and the default profile.yaml.

    TOP_EARNER_CONFIG_PATH wins; otherwise $XDG_CONFIG_HOME/top-earner
    (~/.config/top-earner when XDG_CONFIG_HOME is unset).
    """
    env_path = os.environ.get("TOP_EARNER_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """settings.json inside the config dir (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Contents of settings.json, or {} before anything has been saved."""
    path = get_settings_path()
    if not path.exists():
        return {}

    with open(path, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Write settings.json, creating the config dir; returns the file path."""
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(settings, f, indent=2)

    return path


def get_setting(key: str, default: Any = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Update one key in settings.json, keeping the others."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    custom_profile = get_setting("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Fix the 'profile' key in {get_settings_path()}"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found at {profile_path}\n\n"
            f"Create one with: top-earner profile init"
        )

    return profile_path


def load_profile(require_exists: bool = False) -> dict:
    """Load the job profile from profile.yaml.

    Returns:
        Profile dictionary (empty dict if not required and not found)
    """
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save the job profile to profile.yaml.

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def get_profile_value(key: str, default: Any = None) -> Any:
    """Get a profile value by dot-notation key (e.g. "rules.category")."""
    value = load_profile(require_exists=False)

    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default

    return value


def set_profile_value(key: str, value: Any) -> Path:
    """Set a profile value by dot-notation key."""
    profile = load_profile(require_exists=False)

    parts = key.split(".")
    current = profile

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value

    return save_profile(profile)


# =============================================================================
# Resolved job values (profile/settings with defaults)
# =============================================================================

def get_task_url() -> str:
    return get_profile_value("endpoints.get_task", DEFAULT_GET_TASK_URL)


def get_submit_url() -> str:
    return get_profile_value("endpoints.submit_task", DEFAULT_SUBMIT_TASK_URL)


def get_category() -> str:
    return str(get_profile_value("rules.category", DEFAULT_CATEGORY))


def get_year_offset() -> int:
    """Year offset for the target year rule (1 = prior calendar year)."""
    value = get_profile_value("rules.year_offset", DEFAULT_YEAR_OFFSET)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"rules.year_offset must be an integer, got {value!r}")


def get_timeout() -> float:
    """HTTP timeout in seconds from settings.json."""
    value = get_setting("timeout", DEFAULT_TIMEOUT)
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"timeout must be a number of seconds, got {value!r}")
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")
    return timeout
