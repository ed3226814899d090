"""Persistent service settings backed by QSettings, with environment overrides."""

import os
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QSettings

from core.prediction_client import DEFAULT_TIMEOUT
from core.utils import SETTINGS_APP, SETTINGS_ORG

DEFAULT_SERVICE_URL = "http://localhost:5000"

ENV_SERVICE_URL = "RETINASCAN_SERVICE_URL"
ENV_TIMEOUT = "RETINASCAN_TIMEOUT"


@dataclass(frozen=True)
class ServiceSettings:
    """Where and how long to wait for the prediction service."""
    url: str = DEFAULT_SERVICE_URL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def predict_url(self) -> str:
        return f"{self.url.rstrip('/')}/predict"


def _coerce_timeout(value) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


def get_settings() -> QSettings:
    return QSettings(SETTINGS_ORG, SETTINGS_APP)


def load_service_settings(settings: Optional[QSettings] = None) -> ServiceSettings:
    """Read service settings. Environment variables win over stored values."""
    if settings is None:
        settings = get_settings()
    url = os.environ.get(ENV_SERVICE_URL) or settings.value("service/url", DEFAULT_SERVICE_URL)
    timeout = os.environ.get(ENV_TIMEOUT) or settings.value("service/timeout", DEFAULT_TIMEOUT)
    return ServiceSettings(url=str(url).strip() or DEFAULT_SERVICE_URL, timeout=_coerce_timeout(timeout))


def save_service_settings(service: ServiceSettings, settings: Optional[QSettings] = None):
    if settings is None:
        settings = get_settings()
    settings.setValue("service/url", service.url)
    settings.setValue("service/timeout", service.timeout)
