"""Tests for configuration loading, validation and environment handling."""

import warnings
from pathlib import Path

import pytest

from jobalert.config import (
    AppConfig,
    ConfigurationError,
    SourceType,
    load_config,
    load_environment_config,
    parse_app_config,
)
from jobalert.config.environment import EnvironmentConfig, find_partial_credentials
from jobalert.config.validators import check_for_warnings, check_resume_path

VALID_YAML = """
criteria:
  keywords: [" React ", "frontend", "react", ""]
  location: Chennai
  min_experience_years: 2
  salary_min: 30000
sources:
  - type: indeed
  - type: naukri
  - type: linkedin
    enabled: false
channels:
  telegram:
    max_postings: 3
scan_interval: P1D
"""


def write_config(tmp_path: Path, content: str = VALID_YAML) -> Path:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content, encoding="utf-8")
    return config_file


def minimal(**overrides) -> dict:
    data = {"criteria": {"keywords": ["react"]}, "sources": [{"type": "indeed"}]}
    data.update(overrides)
    return data


class TestLoadConfig:
    def test_load_valid_config(self, tmp_path):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            app_config, env_config = load_config(write_config(tmp_path))

        assert app_config.criteria.keywords == ("react", "frontend")
        assert app_config.criteria.location == "Chennai"
        assert app_config.criteria.min_experience == 2
        assert app_config.criteria.salary_min == 30000
        assert [s.type for s in app_config.get_enabled_sources()] == ["indeed", "naukri"]
        assert app_config.channels.telegram.max_postings == 3
        assert app_config.channels.whatsapp.max_postings == 5
        assert app_config.scan_interval_seconds == 86400
        assert app_config.ledger_path == "./data/sent-links.json"
        assert not env_config.email_configured

    def test_disabled_source_warns(self, tmp_path):
        with pytest.warns(UserWarning, match="linkedin"):
            load_config(write_config(tmp_path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="empty"):
            load_config(write_config(tmp_path, ""))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigurationError, match="parse YAML"):
            load_config(write_config(tmp_path, "criteria: [unclosed"))

    def test_environment_overrides_paths(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LEDGER_PATH", str(tmp_path / "ledger.json"))
        monkeypatch.setenv("RESUME_PATH", str(tmp_path / "cv.pdf"))
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            app_config, _ = load_config(write_config(tmp_path))

        assert app_config.ledger_path == str(tmp_path / "ledger.json")
        assert app_config.resume_path == str(tmp_path / "cv.pdf")

    def test_finds_config_in_working_directory(self, tmp_path, monkeypatch):
        write_config(tmp_path)
        monkeypatch.chdir(tmp_path)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            app_config, _ = load_config()
        assert app_config.criteria.location == "Chennai"


class TestAppConfigValidation:
    def test_minimal_defaults(self):
        config = parse_app_config(minimal())
        assert config.criteria.min_experience == 0
        assert config.channels.email.enabled
        assert config.advanced.max_workers == 4
        assert config.resume_path is None

    def test_empty_keywords_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_app_config(minimal(criteria={"keywords": ["  ", ""]}))
        assert "keyword" in str(exc_info.value)

    def test_missing_sources_reported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_app_config({"criteria": {"keywords": ["react"]}})
        assert "Missing required field: sources" in exc_info.value.errors

    def test_negative_floor_rejected(self):
        with pytest.raises(ConfigurationError):
            parse_app_config(minimal(criteria={"keywords": ["react"], "salary_min": -1}))

    def test_unknown_source_rejected(self):
        with pytest.raises(ConfigurationError, match="sources"):
            parse_app_config(minimal(sources=[{"type": "monsterjobs"}]))

    def test_duplicate_sources_rejected(self):
        with pytest.raises(ConfigurationError, match="Duplicate source"):
            parse_app_config(minimal(sources=[{"type": "indeed"}, {"type": "indeed"}]))

    def test_all_disabled_rejected(self):
        with pytest.raises(ConfigurationError, match="At least one source"):
            parse_app_config(minimal(sources=[{"type": "indeed", "enabled": False}]))

    def test_scan_interval_bounds(self):
        with pytest.raises(ConfigurationError, match="scan_interval"):
            parse_app_config(minimal(scan_interval="1m"))
        assert parse_app_config(minimal(scan_interval="12h")).scan_interval_seconds == 43200

    def test_blank_resume_path_is_none(self):
        assert parse_app_config(minimal(resume_path="  ")).resume_path is None

    def test_every_source_type_accepted(self):
        sources = [{"type": t.value} for t in SourceType]
        config = parse_app_config(minimal(sources=sources))
        assert len(config.get_enabled_sources()) == 6

    def test_criteria_is_frozen(self):
        config = parse_app_config(minimal())
        with pytest.raises(Exception):
            config.criteria.keywords = ("vue",)

    def test_error_message_lists_errors_and_suggestions(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_app_config({"sources": []})
        message = str(exc_info.value)
        assert "Validation Errors:" in message
        assert "Suggestions:" in message


class TestWarnings:
    def test_duplicate_keywords_and_empty_location(self):
        messages = check_for_warnings(
            {"criteria": {"keywords": ["React", "react"]}, "sources": [{"type": "indeed"}]}
        )
        assert any("Duplicate keywords" in m for m in messages)
        assert any("location is empty" in m for m in messages)

    def test_missing_resume(self, tmp_path):
        messages = check_resume_path(str(tmp_path / "missing.pdf"))
        assert messages == [
            f"Resume not found at {tmp_path / 'missing.pdf'}; "
            "emails will be sent without attachment"
        ]

    def test_existing_or_unset_resume(self, tmp_path):
        resume = tmp_path / "cv.pdf"
        resume.write_bytes(b"%PDF-1.4")
        assert check_resume_path(str(resume)) == []
        assert check_resume_path(None) == []

    def test_resume_override_checked_instead_of_yaml(self, tmp_path, monkeypatch):
        resume = tmp_path / "cv.pdf"
        resume.write_bytes(b"%PDF-1.4")
        monkeypatch.setenv("RESUME_PATH", str(resume))
        config_file = write_config(
            tmp_path, VALID_YAML + f"resume_path: {tmp_path / 'gone.pdf'}\n"
        )

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            load_config(config_file)

        assert not any("Resume not found" in str(w.message) for w in caught)

    def test_missing_resume_override_warns(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RESUME_PATH", str(tmp_path / "gone.pdf"))
        with pytest.warns(UserWarning, match="Resume not found"):
            load_config(write_config(tmp_path))

    def test_partial_credentials_warn(self, monkeypatch):
        monkeypatch.setenv("SMTP_USER", "bot@example.com")
        messages = check_for_warnings({"criteria": {"keywords": ["react"], "location": "x"}})
        assert any("email channel is partially configured" in m for m in messages)
        assert any("SMTP_PASS" in m for m in messages)


class TestEnvironmentConfig:
    def test_nothing_configured(self):
        env = load_environment_config()
        assert not env.email_configured
        assert not env.telegram_configured
        assert not env.whatsapp_configured
        assert env.smtp_host == "smtp.gmail.com"
        assert env.smtp_port == 465

    def test_groups_configured_independently(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
        monkeypatch.setenv("TELEGRAM_CHAT_ID", "42")
        env = load_environment_config()
        assert env.telegram_configured
        assert not env.email_configured
        assert not env.whatsapp_configured

    def test_partial_group_not_configured(self, monkeypatch):
        monkeypatch.setenv("SMTP_USER", "bot@example.com")
        monkeypatch.setenv("TARGET_EMAIL", "me@example.com")
        env = load_environment_config()
        assert not env.email_configured
        assert find_partial_credentials() == {"email": ["SMTP_PASS"]}

    def test_blank_values_are_unset(self, monkeypatch):
        monkeypatch.setenv("TWILIO_SID", "   ")
        assert load_environment_config().twilio_sid is None
        assert find_partial_credentials() == {}

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("SMTP_PORT", "smtp")
        with pytest.raises(ConfigurationError, match="SMTP_PORT"):
            load_environment_config()

    def test_invalid_target_email(self, monkeypatch):
        monkeypatch.setenv("TARGET_EMAIL", "not-an-address")
        with pytest.raises(ConfigurationError, match="TARGET_EMAIL"):
            load_environment_config()

    def test_log_level_uppercased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert load_environment_config().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            load_environment_config()

    def test_whatsapp_requires_all_four(self):
        env = EnvironmentConfig(twilio_sid="AC1", twilio_auth="x", twilio_whatsapp_from="+1")
        assert not env.whatsapp_configured
