"""Tests for core.report_composer module."""

import json
from pathlib import Path

import pytest

from core.report_composer import (
    DISCLAIMER,
    NOT_PROVIDED,
    NOT_SPECIFIED,
    ReportComposer,
    report_filename,
)
from core.utils import PatientInfo

TIMESTAMP = "2025-03-07T14:05:09"


@pytest.fixture
def composer():
    return ReportComposer()


@pytest.fixture
def report(composer, sample_result, sample_patient):
    return composer.compose(sample_result, sample_patient, "fundus.jpg", TIMESTAMP, model_accuracy=94.0)


class TestCompose:
    def test_patient_block(self, report):
        assert "Patient ID: P100" in report.splitlines()
        assert "Age: 54 years" in report.splitlines()
        assert "Eye: Left" in report.splitlines()

    def test_results_block(self, report):
        lines = report.splitlines()
        assert "Classification: Moderate Diabetic Retinopathy" in lines
        assert "Confidence Level: 91.8%" in lines
        assert "Severity: MODERATE" in lines
        assert "Model Accuracy: 94%" in lines
        assert "URGENCY LEVEL: MODERATE" in lines

    def test_metadata_from_timestamp(self, report):
        lines = report.splitlines()
        assert "Date: 3/7/2025" in lines
        assert "Time: 2:05:09 PM" in lines
        assert "Image File: fundus.jpg" in lines

    def test_description_and_recommendation(self, report, sample_result):
        lines = report.splitlines()
        assert lines[lines.index("DESCRIPTION:") + 1] == sample_result.description
        assert lines[lines.index("RECOMMENDATION:") + 1] == sample_result.recommendation

    def test_disclaimer_footer(self, report):
        assert DISCLAIMER in report
        assert "screening purposes only" in report

    def test_deterministic(self, composer, sample_result, sample_patient):
        first = composer.compose(sample_result, sample_patient, "fundus.jpg", TIMESTAMP)
        second = composer.compose(sample_result, sample_patient, "fundus.jpg", TIMESTAMP)
        assert first == second

    def test_model_accuracy_line_omitted_when_absent(self, composer, sample_result, sample_patient):
        report = composer.compose(sample_result, sample_patient, "fundus.jpg", TIMESTAMP)
        assert "Model Accuracy" not in report

    def test_missing_patient_fields_use_placeholders(self, composer, sample_result):
        report = composer.compose(sample_result, PatientInfo(), "fundus.jpg", TIMESTAMP)
        lines = report.splitlines()
        assert f"Patient ID: {NOT_PROVIDED}" in lines
        assert f"Age: {NOT_PROVIDED}" in lines
        assert f"Eye: {NOT_SPECIFIED}" in lines

    def test_line_structure_independent_of_patient_completeness(
        self, composer, sample_result, sample_patient
    ):
        full = composer.compose(sample_result, sample_patient, "fundus.jpg", TIMESTAMP)
        empty = composer.compose(sample_result, PatientInfo(), "fundus.jpg", TIMESTAMP)
        assert len(full.splitlines()) == len(empty.splitlines())


class TestReportFilename:
    def test_with_patient_id(self, sample_patient):
        assert report_filename(sample_patient, TIMESTAMP) == "DR_Analysis_Report_P100_3-7-2025.txt"

    def test_without_patient_id(self):
        assert report_filename(PatientInfo(), TIMESTAMP) == "DR_Analysis_Report_Patient_3-7-2025.txt"

    def test_other_extension(self, sample_patient):
        assert report_filename(sample_patient, TIMESTAMP, ext="pdf").endswith(".pdf")


class TestWriters:
    def test_generate_txt(self, tmp_dir, composer, report):
        output = tmp_dir / "report.txt"
        assert composer.generate_txt(report, str(output))
        assert output.read_text(encoding="utf-8") == report

    def test_generate_txt_bad_path(self, tmp_dir, composer, report):
        assert not composer.generate_txt(report, str(tmp_dir / "missing" / "report.txt"))

    def test_generate_json(self, tmp_dir, composer, sample_result, sample_patient):
        output = tmp_dir / "report.json"
        assert composer.generate_json(
            sample_result, sample_patient, "fundus.jpg", TIMESTAMP, str(output), model_accuracy=94.0
        )
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["prediction"]["class"] == "Moderate Diabetic Retinopathy"
        assert data["prediction"]["severity"] == "moderate"
        assert data["patient"] == {"id": "P100", "age": "54", "eye": "left"}
        assert data["timestamp"] == TIMESTAMP
        assert data["model_accuracy"] == 94.0

    def test_generate_pdf(self, tmp_dir, composer, sample_result, sample_patient):
        output = tmp_dir / "report.pdf"
        steps = []
        assert composer.generate_pdf(
            sample_result, sample_patient, "fundus.jpg", TIMESTAMP, str(output),
            on_progress=lambda s, t, m: steps.append(s),
        )
        assert Path(output).read_bytes()[:4] == b"%PDF"
        assert steps == [1, 2, 3]
