"""Shared test fixtures for RetinaScan."""

import json
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest
from PIL import Image

from core.utils import Eye, PatientInfo, PredictionResult, Severity, Urgency


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def sample_jpeg(tmp_dir):
    """A 64x48 RGB fundus stand-in saved as JPEG."""
    img = Image.fromarray(np.random.randint(0, 255, (48, 64, 3), dtype=np.uint8))
    path = tmp_dir / "fundus.jpg"
    img.save(path, format="JPEG")
    return str(path)


@pytest.fixture
def sample_png(tmp_dir):
    """A 32x32 RGB image saved as PNG."""
    img = Image.fromarray(np.random.randint(0, 255, (32, 32, 3), dtype=np.uint8))
    path = tmp_dir / "fundus.png"
    img.save(path, format="PNG")
    return str(path)


@pytest.fixture
def sample_gif(tmp_dir):
    img = Image.fromarray(np.zeros((8, 8), dtype=np.uint8))
    path = tmp_dir / "fundus.gif"
    img.save(path, format="GIF")
    return str(path)


@pytest.fixture
def sample_result():
    return PredictionResult(
        label="Moderate Diabetic Retinopathy",
        confidence=91.8,
        severity=Severity.MODERATE,
        urgency=Urgency.MODERATE,
        recommendation="Schedule follow-up examination in 3-6 months. Optimize diabetes control.",
        description="Moderate diabetic changes present. Closer monitoring recommended.",
    )


@pytest.fixture
def sample_patient():
    return PatientInfo(id="P100", age="54", eye=Eye.LEFT)


@pytest.fixture
def success_payload():
    return {
        "success": True,
        "prediction": {
            "class": "Moderate Diabetic Retinopathy",
            "confidence": 91.8,
            "severity": "moderate",
            "urgency": "moderate",
            "recommendation": "Schedule follow-up examination in 3-6 months.",
            "description": "Moderate diabetic changes present.",
        },
        "timestamp": "2025-03-07T14:05:09",
        "model_accuracy": 94,
    }


def make_http_response(payload) -> MagicMock:
    """Mimic the context manager urllib.request.urlopen returns."""
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    response = MagicMock()
    response.__enter__.return_value.read.return_value = body
    response.__exit__.return_value = False
    return response


@pytest.fixture(autouse=True)
def _init_i18n():
    """Initialize i18n in English for all tests, without reading stored settings."""
    import i18n
    i18n.init("en")


@pytest.fixture
def http_response():
    """Factory for fake urlopen responses."""
    return make_http_response
