"""Tests for core.settings and core.logging_setup modules."""

import logging

import pytest
from PyQt6.QtCore import QSettings

from core.logging_setup import setup_logging
from core.prediction_client import DEFAULT_TIMEOUT
from core.settings import (
    DEFAULT_SERVICE_URL,
    ENV_SERVICE_URL,
    ENV_TIMEOUT,
    ServiceSettings,
    load_service_settings,
    save_service_settings,
)


@pytest.fixture
def qsettings(tmp_dir, monkeypatch):
    monkeypatch.delenv(ENV_SERVICE_URL, raising=False)
    monkeypatch.delenv(ENV_TIMEOUT, raising=False)
    return QSettings(str(tmp_dir / "settings.ini"), QSettings.Format.IniFormat)


class TestServiceSettings:
    def test_defaults(self, qsettings):
        service = load_service_settings(qsettings)
        assert service.url == DEFAULT_SERVICE_URL
        assert service.timeout == DEFAULT_TIMEOUT

    def test_predict_url(self):
        assert ServiceSettings(url="http://host:8000/api/").predict_url == "http://host:8000/api/predict"

    def test_save_and_load(self, qsettings):
        save_service_settings(ServiceSettings(url="http://dr.local", timeout=12.5), qsettings)
        service = load_service_settings(qsettings)
        assert service.url == "http://dr.local"
        assert service.timeout == 12.5

    def test_environment_overrides(self, qsettings, monkeypatch):
        save_service_settings(ServiceSettings(url="http://stored", timeout=10), qsettings)
        monkeypatch.setenv(ENV_SERVICE_URL, "http://from-env")
        monkeypatch.setenv(ENV_TIMEOUT, "3")
        service = load_service_settings(qsettings)
        assert service.url == "http://from-env"
        assert service.timeout == 3.0

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_bad_timeout_falls_back(self, qsettings, monkeypatch, value):
        monkeypatch.setenv(ENV_TIMEOUT, value)
        assert load_service_settings(qsettings).timeout == DEFAULT_TIMEOUT


class TestLogging:
    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("RETINASCAN_LOG_LEVEL", "debug")
        setup_logging(log_to_file=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_level(self):
        setup_logging("warning", log_to_file=False)
        assert logging.getLogger().level == logging.WARNING
