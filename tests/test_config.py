"""Tests for YAML config loading and env overrides."""

from __future__ import annotations

from afflink.config import DEFAULT_API_BASE, load_config
from afflink.settings import Settings


class TestLoadConfig:
    def test_defaults_when_file_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = load_config(str(tmp_path / "missing.yaml"))

        assert cfg.api.base_url == DEFAULT_API_BASE
        assert cfg.api.per_page == 500
        assert cfg.api.locale == "zh-TW"
        assert cfg.settings.http_timeout == 30.0

    def test_reads_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "config.yaml"
        path.write_text(
            "api:\n"
            "  base_url: https://api.example.test/v2\n"
            "  per_page: 100\n"
            "  locale: en\n"
            "settings:\n"
            "  log_dir: /tmp/afflink-logs\n"
            "  http_timeout: 5\n"
        )
        cfg = load_config(str(path))

        assert cfg.api.base_url == "https://api.example.test/v2"
        assert cfg.api.per_page == 100
        assert cfg.api.locale == "en"
        assert cfg.settings.log_dir == "/tmp/afflink-logs"
        assert cfg.settings.http_timeout == 5.0

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("AFFLINK_HTTP_TIMEOUT", "12.5")
        monkeypatch.setenv("AFFLINK_DATABASE_URL", "sqlite:///override.db")
        path = tmp_path / "config.yaml"
        path.write_text("settings:\n  http_timeout: 5\n  database_url: sqlite:///yaml.db\n")

        cfg = load_config(str(path))

        assert cfg.settings.http_timeout == 12.5
        assert cfg.settings.database_url == "sqlite:///override.db"

    def test_empty_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)).api.base_url == DEFAULT_API_BASE


class TestSettings:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("AFFLINK_PROXY_URL", "http://proxy.local:3128")
        assert Settings().proxy_url == "http://proxy.local:3128"
