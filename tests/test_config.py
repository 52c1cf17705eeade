from __future__ import annotations

import json

import pytest

from teamgate.config import DEFAULT_RESERVED_TEAM_NAMES, TeamgateConfig, get_config, load_config, reset_config
from teamgate.exceptions import ConfigError


class TestTeamgateConfig:
    def setup_method(self):
        reset_config()

    def test_default_values(self):
        config = get_config()
        assert config.wakeup_check_interval == 30.0
        assert config.wakeup_threshold == 60.0
        assert config.unread_check_seconds == 10.0
        assert config.group_page_size == 60
        assert config.error_path == "/error?type=team_not_found"
        assert config.discard_stale_channel_results is False

    def test_singleton(self):
        c1 = get_config()
        c2 = get_config()
        assert c1 is c2

    def test_reset(self):
        c1 = get_config()
        reset_config()
        c2 = get_config()
        assert c1 is not c2

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TEAMGATE_WAKEUP_THRESHOLD", "90")
        monkeypatch.setenv("TEAMGATE_RESERVED_TEAM_NAMES", '["admin_console"]')
        config = TeamgateConfig()
        assert config.wakeup_threshold == 90.0
        assert config.reserved_team_names == ["admin_console"]

    def test_reserved_names(self):
        config = TeamgateConfig()
        for name in DEFAULT_RESERVED_TEAM_NAMES:
            assert config.is_reserved(name)
        assert not config.is_reserved("alpha")

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            TeamgateConfig(group_page_size="many")


class TestLoadConfig:
    def test_load_yaml(self, tmp_path):
        path = tmp_path / "teamgate.yaml"
        path.write_text("teamgate:\n  unread_check_seconds: 5\n  reserved_team_names: [admin_console]\n")
        config = load_config(path)
        assert config.unread_check_seconds == 5.0
        assert config.is_reserved("admin_console")

    def test_load_json(self, tmp_path):
        path = tmp_path / "teamgate.json"
        path.write_text(json.dumps({"group_page_size": 100}))
        assert load_config(path).group_page_size == 100

    def test_missing_file(self):
        with pytest.raises(ConfigError, match="not found"):
            load_config("/nonexistent/teamgate.yaml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "teamgate.toml"
        path.write_text("x = 1")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_config(path)

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "teamgate.yaml"
        path.write_text("wakeup_threshold: soon\n")
        with pytest.raises(ConfigError, match="Invalid"):
            load_config(path)

    @pytest.mark.parametrize(
        ("name", "content"),
        [
            ("teamgate.json", "{not json"),
            ("teamgate.yaml", "a: ["),
        ],
    )
    def test_unparseable_content(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigError, match="Could not parse"):
            load_config(path)

    @pytest.mark.parametrize(("name", "content"), [("teamgate.yaml", "5\n"), ("teamgate.json", "[1, 2]")])
    def test_non_mapping_document(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(path)
