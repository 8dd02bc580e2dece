"""Tests for Settings loading."""

import pytest

from ns_mcp import __version__
from ns_mcp.config import DEFAULT_BASE_URL, ConfigError, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("NS_API_KEY", "NS_API_BASE_URL", "NS_MCP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsFromEnv:
    def test_missing_key_raises(self) -> None:
        with pytest.raises(ConfigError, match="NS_API_KEY"):
            Settings.from_env(dotenv=False)

    def test_empty_key_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NS_API_KEY", "")
        with pytest.raises(ConfigError):
            Settings.from_env(dotenv=False)

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NS_API_KEY", "abc123")
        settings = Settings.from_env(dotenv=False)
        assert settings.ns_api_key == "abc123"
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.server_name == "ns-mcp-server"
        assert settings.server_version == __version__
        assert settings.log_level == "WARNING"

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NS_API_KEY", "abc123")
        monkeypatch.setenv("NS_API_BASE_URL", "https://gateway.test")
        monkeypatch.setenv("NS_MCP_LOG_LEVEL", "debug")
        settings = Settings.from_env(dotenv=False)
        assert settings.base_url == "https://gateway.test"
        assert settings.log_level == "DEBUG"

    def test_dotenv_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("NS_API_KEY=from-dotenv\n")
        monkeypatch.chdir(tmp_path)
        settings = Settings.from_env()
        assert settings.ns_api_key == "from-dotenv"
        monkeypatch.delenv("NS_API_KEY", raising=False)


class TestSettingsModel:
    def test_frozen(self) -> None:
        settings = Settings(ns_api_key="k")
        with pytest.raises(Exception):
            settings.ns_api_key = "other"  # type: ignore[misc]
