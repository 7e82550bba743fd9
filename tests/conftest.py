"""Shared fixtures for the job alert test suite."""

from typing import Callable

import pytest

from jobalert.config.environment import CREDENTIAL_GROUPS, EnvironmentConfig
from jobalert.config.models import AppConfig
from jobalert.domain.models import FilterCriteria, Posting
from jobalert.logging.context import clear_log_context

OVERRIDE_VARS = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_SENDER_NAME",
    "LOG_LEVEL",
    "LEDGER_PATH",
    "RESUME_PATH",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove every variable the application reads so tests start unconfigured."""
    for names in CREDENTIAL_GROUPS.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    for name in OVERRIDE_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clean_log_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def criteria() -> FilterCriteria:
    return FilterCriteria(keywords=["react", "frontend"], location="Chennai")


@pytest.fixture
def make_posting() -> Callable[..., Posting]:
    """Factory for postings with sensible defaults."""

    def _make(
        title: str = "React Developer",
        company: str = "Acme",
        source: str = "Test",
        url: str = None,
        snippet: str = "",
        **kwargs,
    ) -> Posting:
        return Posting(
            title=title, company=company, source=source, url=url, snippet=snippet, **kwargs
        )

    return _make


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig.model_validate(
        {
            "criteria": {"keywords": ["react"], "location": "Chennai"},
            "sources": [{"type": "indeed"}, {"type": "naukri"}],
            "ledger_path": str(tmp_path / "data" / "sent-links.json"),
        }
    )


@pytest.fixture
def full_env_config() -> EnvironmentConfig:
    """Every channel configured."""
    return EnvironmentConfig(
        smtp_user="bot@example.com",
        smtp_pass="app-password",
        target_email="me@example.com",
        telegram_token="123:abc",
        telegram_chat_id="42",
        twilio_sid="AC123",
        twilio_auth="secret",
        twilio_whatsapp_from="+14155238886",
        twilio_whatsapp_to="+919800000000",
    )
