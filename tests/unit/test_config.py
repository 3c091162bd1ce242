"""Tests for settings.json handling.

Uses isolated directories via tmp_path and FREELANCE_TAX_CONFIG_PATH
to avoid touching the user's real settings.
"""

import json

import pytest

from freelancetax.sdk.config import (
    SettingsError,
    get_config_dir,
    get_defaults,
    get_setting,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
    validate_setting,
)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    directory = tmp_path / "config"
    monkeypatch.setenv("FREELANCE_TAX_CONFIG_PATH", str(directory))
    return directory


class TestPaths:

    def test_env_override(self, config_dir):
        assert get_config_dir() == config_dir
        assert get_settings_path() == config_dir / "settings.json"

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FREELANCE_TAX_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "freelance-tax"


class TestSettings:

    def test_missing_file_is_empty(self, config_dir):
        assert load_settings() == {}
        assert get_setting("state", "CA") == "CA"

    def test_set_and_get(self, config_dir):
        path = set_setting("state", "ny")
        assert path == config_dir / "settings.json"
        assert get_setting("state") == "NY"
        assert json.loads(path.read_text()) == {"state": "NY"}

    def test_filing_status_alias_stored_as_value(self, config_dir):
        set_setting("filing_status", "hoh")
        assert get_setting("filing_status") == "head-of-household"

    def test_tax_year_stored_as_int(self, config_dir):
        set_setting("tax_year", "2025")
        assert get_setting("tax_year") == 2025

    def test_unset(self, config_dir):
        set_setting("state", "TX")
        assert unset_setting("state") is True
        assert unset_setting("state") is False
        assert "state" not in load_settings()

    def test_invalid_json(self, config_dir):
        config_dir.mkdir()
        (config_dir / "settings.json").write_text("{not json")
        with pytest.raises(SettingsError, match="Invalid settings file"):
            load_settings()

    def test_non_object_json(self, config_dir):
        config_dir.mkdir()
        (config_dir / "settings.json").write_text("[1, 2]")
        with pytest.raises(SettingsError):
            load_settings()


class TestValidation:

    def test_unknown_key(self):
        with pytest.raises(SettingsError, match="Unknown setting"):
            validate_setting("color", "blue")

    def test_unknown_key_on_unset(self, config_dir):
        with pytest.raises(SettingsError):
            unset_setting("color")

    @pytest.mark.parametrize("value", ["California", "C1", "", "X"])
    def test_bad_state(self, value):
        with pytest.raises(SettingsError):
            validate_setting("state", value)

    def test_bad_filing_status(self):
        with pytest.raises(SettingsError, match="Valid values"):
            validate_setting("filing_status", "widowed")

    @pytest.mark.parametrize("value", ["25", "20x5", "next"])
    def test_bad_year(self, value):
        with pytest.raises(SettingsError):
            validate_setting("tax_year", value)

    def test_settings_error_is_value_error(self):
        assert issubclass(SettingsError, ValueError)


class TestDefaults:

    def test_built_in_defaults(self, config_dir):
        assert get_defaults() == {"state": "CA", "filing_status": "single", "tax_year": 2025}

    def test_settings_override_defaults(self, config_dir):
        set_setting("state", "WA")
        set_setting("filing_status", "married-jointly")
        defaults = get_defaults()
        assert defaults["state"] == "WA"
        assert defaults["filing_status"] == "married-jointly"
        assert defaults["tax_year"] == 2025
