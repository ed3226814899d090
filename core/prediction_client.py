"""HTTP client for the remote diabetic retinopathy prediction service."""

import http.client
import json
import logging
import socket
import urllib.error
import urllib.request
from typing import Any, Optional

from core.utils import (
    PredictionRequest,
    PredictionResponse,
    PredictionResult,
    Severity,
    Urgency,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

MSG_TIMEOUT = "The prediction service did not respond in time."
MSG_CONNECTION = "Failed to analyze image. Please check your connection and try again."
MSG_MALFORMED = "Received an invalid response from the prediction service."
MSG_ANALYSIS_FAILED = "Analysis failed"


class MalformedResponse(ValueError):
    """The service replied, but not in the agreed shape."""


def _require_number(value: Any, name: str) -> float:
    # bool is an int subclass, and never a valid figure here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(f"{name} must be a number")
    return float(value)


def _optional_text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedResponse(f"{key} must be a string")
    return value


def _timestamp(value: Any) -> str:
    """Keep only ISO-8601 timestamps; anything else falls back to the local clock."""
    if not isinstance(value, str) or not value.strip():
        return ""
    try:
        parse_timestamp(value)
    except ValueError:
        logger.warning("Ignoring unparseable timestamp %r from prediction service", value)
        return ""
    return value


def parse_prediction(data: Any) -> PredictionResult:
    """Build a PredictionResult from the service's `prediction` object."""
    if not isinstance(data, dict):
        raise MalformedResponse("prediction must be an object")

    label = data.get("class")
    if not isinstance(label, str) or not label:
        raise MalformedResponse("prediction.class is required")

    try:
        severity = Severity(data.get("severity"))
        urgency = Urgency(data.get("urgency"))
    except ValueError as e:
        raise MalformedResponse(str(e)) from e

    return PredictionResult(
        label=label,
        confidence=_require_number(data.get("confidence"), "prediction.confidence"),
        severity=severity,
        urgency=urgency,
        recommendation=_optional_text(data, "recommendation"),
        description=_optional_text(data, "description"),
    )


def parse_response(payload: Any) -> PredictionResponse:
    """Normalize a decoded JSON body into a PredictionResponse.

    Raises MalformedResponse when the body matches neither the success nor
    the failure shape.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
        raise MalformedResponse("missing boolean 'success'")

    if not payload["success"]:
        error = payload.get("error")
        if not isinstance(error, str) or not error.strip():
            error = MSG_ANALYSIS_FAILED
        return PredictionResponse.failure(error)

    accuracy = payload.get("model_accuracy")
    return PredictionResponse(
        success=True,
        prediction=parse_prediction(payload.get("prediction")),
        timestamp=_timestamp(payload.get("timestamp")),
        model_accuracy=None if accuracy is None else _require_number(accuracy, "model_accuracy"),
    )


def _error_from_body(body: bytes) -> Optional[str]:
    """Pull an `error` string out of a JSON error body, if there is one."""
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error.strip():
            return error
    return None


class PredictionClient:
    """Sends one prediction request per call and never raises transport errors.

    Every failure (refused connection, timeout, HTTP error status, body that
    is not the agreed JSON) is folded into ``PredictionResponse.failure``.
    No connection or session state survives between calls.
    """

    def __init__(self, predict_url: str, timeout: float = DEFAULT_TIMEOUT):
        self._predict_url = predict_url
        self._timeout = timeout

    @property
    def predict_url(self) -> str:
        return self._predict_url

    def predict(self, request: PredictionRequest) -> PredictionResponse:
        body = json.dumps(request.to_payload()).encode("utf-8")
        http_request = urllib.request.Request(
            self._predict_url,
            data=body,
            method="POST",
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        logger.info("POST %s (%d bytes)", self._predict_url, len(body))

        try:
            with urllib.request.urlopen(http_request, timeout=self._timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            detail = _error_from_body(e.read())
            logger.warning("Prediction service returned HTTP %s", e.code)
            return PredictionResponse.failure(
                detail or f"Prediction service returned HTTP {e.code}"
            )
        except (socket.timeout, TimeoutError) as e:
            logger.warning("Prediction request timed out: %s", e)
            return PredictionResponse.failure(MSG_TIMEOUT)
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                logger.warning("Prediction request timed out: %s", e.reason)
                return PredictionResponse.failure(MSG_TIMEOUT)
            logger.warning("Prediction request failed: %s", e.reason)
            return PredictionResponse.failure(MSG_CONNECTION)
        except (OSError, http.client.HTTPException) as e:
            logger.warning("Prediction request failed: %s: %s", type(e).__name__, e)
            return PredictionResponse.failure(MSG_CONNECTION)

        try:
            result = parse_response(json.loads(raw.decode("utf-8")))
        except (UnicodeDecodeError, ValueError) as e:
            # MalformedResponse and JSONDecodeError are both ValueErrors
            logger.warning("Malformed prediction response: %s", e)
            return PredictionResponse.failure(MSG_MALFORMED)

        if result.success:
            logger.info(
                "Prediction received: severity=%s urgency=%s",
                result.prediction.severity.value,
                result.prediction.urgency.value,
            )
        else:
            logger.info("Prediction service reported failure: %s", result.error)
        return result
