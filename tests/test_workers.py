"""Tests for the QThread workers, driven synchronously through run()."""

from unittest.mock import MagicMock

import pytest

from core.image_intake import ImageIntake
from core.prediction_client import MSG_CONNECTION
from core.utils import PatientInfo, PredictionRequest, PredictionResponse
from core.workflow import PendingSubmission, Succeeded
from workers.prediction_worker import PredictionWorker
from workers.report_worker import ReportWorker


@pytest.fixture
def pending():
    return PendingSubmission(
        token=7, request=PredictionRequest(image="data:image/png;base64,AA==", patient_info=PatientInfo())
    )


@pytest.fixture
def outcome(sample_result, sample_patient, sample_jpeg):
    return Succeeded(
        image=ImageIntake().validate(sample_jpeg),
        result=sample_result,
        timestamp="2025-03-07T14:05:09",
        model_accuracy=94.0,
        patient_info=sample_patient,
    )


class TestPredictionWorker:
    def test_emits_token_and_response(self, pending):
        client = MagicMock()
        client.predict.return_value = PredictionResponse.failure("Request timed out. Please try again.")
        worker = PredictionWorker(client, pending)
        received = []
        worker.finished.connect(lambda token, response: received.append((token, response)))

        worker.run()

        client.predict.assert_called_once_with(pending.request)
        assert received == [(7, client.predict.return_value)]

    def test_crash_becomes_failure(self, pending):
        client = MagicMock()
        client.predict.side_effect = RuntimeError("boom")
        worker = PredictionWorker(client, pending)
        received = []
        worker.finished.connect(lambda token, response: received.append(response))

        worker.run()

        assert not received[0].success
        assert received[0].error.startswith(MSG_CONNECTION)


class TestReportWorker:
    @pytest.mark.parametrize("fmt", ["txt", "json", "pdf"])
    def test_writes_each_format(self, tmp_dir, outcome, fmt):
        path = str(tmp_dir / f"report.{fmt}")
        worker = ReportWorker(outcome, path, format=fmt)
        finished, errors = [], []
        worker.finished.connect(finished.append)
        worker.error.connect(errors.append)

        worker.run()

        assert finished == [path]
        assert errors == []

    def test_unknown_format(self, tmp_dir, outcome):
        worker = ReportWorker(outcome, str(tmp_dir / "report.doc"), format="doc")
        errors = []
        worker.error.connect(errors.append)

        worker.run()

        assert errors == ["Unknown format: doc"]
