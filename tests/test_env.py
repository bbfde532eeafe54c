"""
Tests for endpoint configuration.
"""

import pytest

from doctracker.env import (
    DEFAULT_API_URL,
    PLACEHOLDER_URL,
    accepts_override,
    get_settings,
    is_configured,
    load_env,
)


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.delenv("DOCTRACKER_API_URL", raising=False)
        monkeypatch.delenv("DOCTRACKER_LOG_DIR", raising=False)
        monkeypatch.delenv("DOCTRACKER_TIMEOUT", raising=False)
        monkeypatch.setenv("DOCTRACKER_HOME", str(tmp_path))
        settings = get_settings()
        assert settings.api_url == DEFAULT_API_URL
        assert settings.timeout == 20.0
        assert settings.home == tmp_path
        assert settings.log_dir == tmp_path / "logs"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DOCTRACKER_API_URL", " https://script.google.com/macros/s/abc/exec ")
        monkeypatch.setenv("DOCTRACKER_TIMEOUT", "5")
        monkeypatch.setenv("DOCTRACKER_LOG_DIR", str(tmp_path / "l"))
        settings = get_settings()
        assert settings.api_url == "https://script.google.com/macros/s/abc/exec"
        assert settings.timeout == 5.0
        assert settings.log_dir == tmp_path / "l"

    def test_malformed_timeout_exits_with_message(self, monkeypatch):
        monkeypatch.setenv("DOCTRACKER_TIMEOUT", "ten")
        with pytest.raises(SystemExit, match="DOCTRACKER_TIMEOUT must be a number"):
            get_settings()

    def test_load_env_reads_dotenv(self, monkeypatch, tmp_path):
        monkeypatch.delenv("DOCTRACKER_API_URL", raising=False)
        (tmp_path / ".env").write_text("DOCTRACKER_API_URL=https://script.google.com/macros/s/env/exec\n")
        monkeypatch.chdir(tmp_path)
        load_env()
        assert get_settings().api_url == "https://script.google.com/macros/s/env/exec"


class TestEndpointChecks:
    """Test endpoint acceptance rules."""

    def test_placeholder_is_not_configured(self):
        assert not is_configured(PLACEHOLDER_URL)
        assert not is_configured("")
        assert is_configured(DEFAULT_API_URL)

    def test_override_needs_apps_script_host(self):
        assert accepts_override("https://script.google.com/macros/s/x/exec")
        assert not accepts_override("https://example.com/exec")
        assert not accepts_override(None)
