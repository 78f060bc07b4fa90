"""Tests for settings.json / profile.yaml resolution."""

import json

import pytest
import yaml

from topearner.sdk import config


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config directory at an empty temp dir."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TOP_EARNER_CONFIG_PATH", str(config_dir))
    return config_dir


class TestConfigDir:

    def test_env_var_wins(self, isolated_config):
        assert config.get_config_dir() == isolated_config

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TOP_EARNER_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert config.get_config_dir() == tmp_path / "top-earner"


class TestDefaults:

    def test_no_files_gives_defaults(self, isolated_config):
        assert config.get_task_url() == config.DEFAULT_GET_TASK_URL
        assert config.get_submit_url() == config.DEFAULT_SUBMIT_TASK_URL
        assert config.get_category() == "alpha"
        assert config.get_year_offset() == 1
        assert config.get_timeout() == config.DEFAULT_TIMEOUT

    def test_missing_profile_required(self, isolated_config):
        with pytest.raises(config.ProfileNotFoundError):
            config.load_profile(require_exists=True)


class TestProfile:

    def test_profile_values_override_defaults(self, isolated_config):
        profile = {
            "endpoints": {"get_task": "http://localhost/get", "submit_task": "http://localhost/post"},
            "rules": {"category": "beta", "year_offset": 2},
        }
        (isolated_config / "profile.yaml").write_text(yaml.dump(profile))

        assert config.get_task_url() == "http://localhost/get"
        assert config.get_submit_url() == "http://localhost/post"
        assert config.get_category() == "beta"
        assert config.get_year_offset() == 2

    def test_partial_profile_falls_back(self, isolated_config):
        (isolated_config / "profile.yaml").write_text(yaml.dump({"rules": {"category": "gamma"}}))

        assert config.get_category() == "gamma"
        assert config.get_year_offset() == 1
        assert config.get_task_url() == config.DEFAULT_GET_TASK_URL

    def test_bad_year_offset(self, isolated_config):
        (isolated_config / "profile.yaml").write_text(yaml.dump({"rules": {"year_offset": "last"}}))
        with pytest.raises(ValueError, match="year_offset"):
            config.get_year_offset()

    def test_set_profile_value_creates_nesting(self, isolated_config):
        config.set_profile_value("rules.category", "delta")

        saved = yaml.safe_load((isolated_config / "profile.yaml").read_text())
        assert saved == {"rules": {"category": "delta"}}
        assert config.get_profile_value("rules.category") == "delta"

    def test_custom_profile_path_from_settings(self, isolated_config, tmp_path):
        custom = tmp_path / "elsewhere.yaml"
        custom.write_text(yaml.dump({"rules": {"category": "omega"}}))
        (isolated_config / "settings.json").write_text(json.dumps({"profile": str(custom)}))

        assert config.get_profile_path() == custom
        assert config.get_category() == "omega"

    def test_custom_profile_path_missing(self, isolated_config, tmp_path):
        (isolated_config / "settings.json").write_text(json.dumps({"profile": str(tmp_path / "nope.yaml")}))
        with pytest.raises(config.ProfileNotFoundError, match="configured path"):
            config.get_profile_path(require_exists=True)


class TestSettings:

    def test_save_creates_missing_config_dir(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "not" / "there"
        monkeypatch.setenv("TOP_EARNER_CONFIG_PATH", str(config_dir))

        assert config.load_settings() == {}
        config.set_setting("profile", "/tmp/p.yaml")
        config.set_setting("timeout", 9)

        assert json.loads((config_dir / "settings.json").read_text()) == {
            "profile": "/tmp/p.yaml",
            "timeout": 9,
        }

    def test_set_and_get_timeout(self, isolated_config):
        config.set_setting("timeout", 5)

        assert json.loads((isolated_config / "settings.json").read_text()) == {"timeout": 5}
        assert config.get_timeout() == 5.0

    @pytest.mark.parametrize("value", [0, -1, "soon"])
    def test_invalid_timeout(self, isolated_config, value):
        config.set_setting("timeout", value)
        with pytest.raises(ValueError, match="timeout"):
            config.get_timeout()
