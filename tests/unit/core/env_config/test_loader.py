"""
Tests for configuration loader.
"""

import pytest

from dapr_http.core.config import DaprHttpConfig
from dapr_http.core.env_config import config_summary, load_from_env
from dapr_http.core.exceptions import ConfigurationError
from dapr_http.core.logging.config import LogFormat, LogLevel


class TestLoadFromEnv:
    """Test load_from_env function."""

    def test_load_with_defaults(self):
        config = load_from_env()

        assert isinstance(config, DaprHttpConfig)
        assert config.base_url == "http://127.0.0.1:3500"
        assert config.api_token is None
        assert config.timeout.as_tuple() == (5.0, 60.0)
        assert config.logging is None

    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("DAPR_SIDECAR_IP", "10.0.0.5")
        monkeypatch.setenv("DAPR_HTTP_PORT", "3501")
        monkeypatch.setenv("DAPR_API_TOKEN", "secret-token")
        monkeypatch.setenv("DAPR_TIMEOUT_READ", "15")

        config = load_from_env()

        assert config.base_url == "http://10.0.0.5:3501"
        assert config.api_token == "secret-token"
        assert config.timeout.read == 15

    def test_load_from_env_file(self, tmp_path):
        env_file = tmp_path / "dapr.env"
        env_file.write_text("DAPR_HTTP_PORT=3600\nDAPR_TIMEOUT_CONNECT=2\n", encoding="utf-8")

        config = load_from_env(env_file=str(env_file))

        assert config.http_port == 3600
        assert config.timeout.connect == 2

    def test_default_env_file_in_cwd(self, tmp_path):
        (tmp_path / ".env").write_text("DAPR_HTTP_PORT=3700\n", encoding="utf-8")

        assert load_from_env().http_port == 3700

    def test_environment_beats_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / "dapr.env"
        env_file.write_text("DAPR_HTTP_PORT=3600\n", encoding="utf-8")
        monkeypatch.setenv("DAPR_HTTP_PORT", "3601")

        assert load_from_env(env_file=str(env_file)).http_port == 3601

    def test_overrides_take_priority(self, monkeypatch):
        monkeypatch.setenv("DAPR_HTTP_PORT", "3601")

        config = load_from_env(http_port=3502, timeout_read=20.0)

        assert config.http_port == 3502
        assert config.timeout.read == 20

    def test_empty_token_is_none(self, monkeypatch):
        monkeypatch.setenv("DAPR_API_TOKEN", "")

        assert load_from_env().api_token is None

    @pytest.mark.parametrize("name,value", [
        ("DAPR_HTTP_PORT", "0"),
        ("DAPR_HTTP_PORT", "70000"),
        ("DAPR_HTTP_PORT", "not-a-port"),
        ("DAPR_TIMEOUT_READ", "-1"),
        ("DAPR_LOG_FORMAT", "xml"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigurationError, match="Invalid Dapr settings"):
            load_from_env()

    def test_logging_enabled(self, monkeypatch, tmp_path):
        log_file = tmp_path / "logs" / "dapr.log"
        monkeypatch.setenv("DAPR_LOG_ENABLE", "true")
        monkeypatch.setenv("DAPR_LOG_LEVEL", "debug")
        monkeypatch.setenv("DAPR_LOG_FORMAT", "json")
        monkeypatch.setenv("DAPR_LOG_FILE_PATH", str(log_file))

        config = load_from_env()

        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON
        assert config.logging.enable_file is True
        assert config.logging.file_path == str(log_file)
        assert config.logging.console is True

    def test_logging_file_only(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DAPR_LOG_ENABLE", "true")
        monkeypatch.setenv("DAPR_LOG_CONSOLE", "false")
        monkeypatch.setenv("DAPR_LOG_FILE_PATH", str(tmp_path / "dapr.log"))

        config = load_from_env()

        assert config.logging.console is False
        assert config.logging.enable_file is True

    def test_logging_without_destination(self, monkeypatch):
        monkeypatch.setenv("DAPR_LOG_ENABLE", "true")
        monkeypatch.setenv("DAPR_LOG_CONSOLE", "false")

        with pytest.raises(ConfigurationError, match="Invalid logging settings"):
            load_from_env()

    def test_logging_disabled_by_default(self, monkeypatch):
        monkeypatch.setenv("DAPR_LOG_LEVEL", "DEBUG")

        assert load_from_env().logging is None


class TestConfigSummary:

    def test_token_masked(self):
        config = DaprHttpConfig.create(
            api_token="secret-token",
            headers={"Authorization": "Bearer abc", "X-Tenant": "acme"},
        )

        summary = config_summary(config)

        assert "secret-token" not in summary
        assert "Bearer abc" not in summary
        assert "api_token: ***" in summary
        assert "base_url: http://127.0.0.1:3500" in summary
        assert "acme" in summary

    def test_without_token(self):
        assert "api_token: None" in config_summary(DaprHttpConfig())

    def test_logging_section(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DAPR_LOG_ENABLE", "1")
        monkeypatch.setenv("DAPR_LOG_FILE_PATH", str(tmp_path / "dapr.log"))

        summary = config_summary(load_from_env())

        assert "logging: level=INFO, format=text" in summary
        assert "file:" in summary
