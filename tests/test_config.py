"""Tests for suspendlist configuration."""

from pathlib import Path

from suspendlist.config import SuspendListConfig, get_config, get_log_level, reset_config


class TestConfig:
    def test_defaults(self):
        config = SuspendListConfig()
        assert config.transactional is True
        assert config.log_level == "info"
        assert config.log_format == "text"
        assert config.service_name == "suspendlist"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SUSPENDLIST_LOG_LEVEL", "debug")
        monkeypatch.setenv("SUSPENDLIST_TRANSACTIONAL", "0")
        config = SuspendListConfig()
        assert config.log_level == "debug"
        assert config.transactional is False

    def test_singleton(self):
        assert get_config() is get_config()

    def test_overrides_replace_singleton(self):
        config = get_config(log_level="error")
        assert config.log_level == "error"
        assert get_log_level() == "error"

    def test_reset(self):
        first = get_config()
        reset_config()
        assert get_config() is not first

    def test_rule_set_dir_expands_user(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/tester")
        config = SuspendListConfig(rule_set_dir="~/rules")
        assert config.rule_set_dir == "/home/tester/rules"

    def test_resolve_rule_set_path(self, tmp_path):
        config = SuspendListConfig(rule_set_dir=str(tmp_path))
        assert config.resolve_rule_set_path("a.yaml") == tmp_path / "a.yaml"
        assert config.resolve_rule_set_path("/abs/b.yaml") == Path("/abs/b.yaml")
