"""
Environment overrides for risk thresholds (services.config).

Thresholds are read at import time, so each test reloads config and the
analyzer modules after setting the environment, then reloads them again
with the environment restored.
"""

import importlib

import pytest

from services import config, email_analysis, url_analysis
from services.engine import RiskLevel

THRESHOLD_VARS = (
    "URL_MEDIUM_THRESHOLD",
    "URL_HIGH_THRESHOLD",
    "EMAIL_MEDIUM_THRESHOLD",
    "EMAIL_HIGH_THRESHOLD",
)


def _reload_all():
    for module in (config, url_analysis, email_analysis):
        importlib.reload(module)


@pytest.fixture
def reload_settings(monkeypatch):
    for name in THRESHOLD_VARS:
        monkeypatch.delenv(name, raising=False)
    yield _reload_all
    monkeypatch.undo()
    _reload_all()


def test_defaults(reload_settings):
    reload_settings()

    assert (config.URL_MEDIUM_THRESHOLD, config.URL_HIGH_THRESHOLD) == (25, 50)
    assert (config.EMAIL_MEDIUM_THRESHOLD, config.EMAIL_HIGH_THRESHOLD) == (30, 60)


def test_url_high_threshold_override(reload_settings, monkeypatch):
    monkeypatch.setenv("URL_HIGH_THRESHOLD", "45")
    reload_settings()

    result = url_analysis.analyze_url("http://bit.ly/free-prize")

    assert url_analysis.URL_ENGINE.thresholds.high == 45
    assert result.risk_score == 45
    assert result.risk_level is RiskLevel.HIGH


def test_email_medium_threshold_override(reload_settings, monkeypatch):
    monkeypatch.setenv("EMAIL_MEDIUM_THRESHOLD", "10")
    reload_settings()

    result = email_analysis.analyze_email("We have recieve your request")

    assert result.risk_score == 10
    assert result.risk_level is RiskLevel.MEDIUM
    # URL side keeps its own defaults
    assert url_analysis.URL_ENGINE.thresholds.medium == 25


def test_inverted_thresholds_fail_at_import(reload_settings, monkeypatch):
    monkeypatch.setenv("URL_MEDIUM_THRESHOLD", "60")
    monkeypatch.setenv("URL_HIGH_THRESHOLD", "50")

    with pytest.raises(ValueError, match="medium <= high"):
        reload_settings()


def test_non_numeric_threshold_fails_at_import(reload_settings, monkeypatch):
    monkeypatch.setenv("EMAIL_HIGH_THRESHOLD", "sixty")

    with pytest.raises(ValueError):
        reload_settings()
