"""Configuration management for Freelance Tax.

settings.json holds machine-specific defaults for the estimator:
   - state: default state code (e.g., "NY")
   - filing_status: default filing status (e.g., "married-jointly")
   - tax_year: default tax year for reference data (e.g., 2025)

Only defaults are stored; estimates are never persisted.

Config directory resolution:
1. FREELANCE_TAX_CONFIG_PATH environment variable (if set)
2. ~/.config/freelance-tax/ (XDG_CONFIG_HOME fallback)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .inputs import (
    DEFAULT_FILING_STATUS,
    DEFAULT_STATE,
    FILING_STATUS_ALIASES,
    normalize_state_code,
)
from .taxes.rules import DEFAULT_TAX_YEAR
from .taxes.schemas import FilingStatus

logger = logging.getLogger(__name__)

APP_NAME = "freelance-tax"
SETTINGS_FILENAME = "settings.json"
CONFIG_PATH_ENV = "FREELANCE_TAX_CONFIG_PATH"

SETTING_KEYS = ("state", "filing_status", "tax_year")


class SettingsError(ValueError):
    """Raised for unknown setting keys or invalid setting values."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. FREELANCE_TAX_CONFIG_PATH environment variable
    2. ~/.config/freelance-tax/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsError: If the file is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        try:
            settings = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsError(f"Invalid settings file {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsError(f"Invalid settings file {settings_file}: expected a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    logger.debug(f"saved settings to {settings_file}")
    return settings_file


def validate_setting(key: str, value: Any) -> Any:
    """Check a setting and return its stored form.

    Raises:
        SettingsError: If the key is unknown or the value is invalid
    """
    if key not in SETTING_KEYS:
        raise SettingsError(f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_KEYS)}")

    if key == "state":
        code = normalize_state_code(str(value))
        if not code.isalpha() or len(code) != 2:
            raise SettingsError(f"Invalid state '{value}'. Must be a 2-letter code.")
        return code

    if key == "filing_status":
        status = str(value).strip().lower()
        if status in FILING_STATUS_ALIASES:
            return FILING_STATUS_ALIASES[status].value
        try:
            return FilingStatus(status).value
        except ValueError:
            valid = ", ".join(s.value for s in FilingStatus)
            raise SettingsError(f"Invalid filing_status '{value}'. Valid values: {valid}")

    year = str(value).strip()
    if not year.isdigit() or len(year) != 4:
        raise SettingsError(f"Invalid tax_year '{value}'. Must be 4 digits.")
    return int(year)


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json, or default if unset."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Validate and store a setting in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = validate_setting(key, value)
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    if key not in SETTING_KEYS:
        raise SettingsError(f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_KEYS)}")

    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_defaults() -> dict:
    """Effective estimator defaults: settings.json values over built-ins."""
    settings = load_settings()
    return {
        "state": settings.get("state", DEFAULT_STATE),
        "filing_status": settings.get("filing_status", DEFAULT_FILING_STATUS.value),
        "tax_year": settings.get("tax_year", DEFAULT_TAX_YEAR),
    }
