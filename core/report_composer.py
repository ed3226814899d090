"""Report composition for finished analyses: plain text, JSON, and PDF."""

import json
import logging
from typing import List, Optional

from core.utils import (
    APP_NAME,
    APP_VERSION,
    PatientInfo,
    PredictionResult,
    ProgressCallback,
    format_date,
    format_percent,
    format_time,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

REPORT_TITLE = "DIABETIC RETINOPATHY ANALYSIS REPORT"
NOT_PROVIDED = "Not provided"
NOT_SPECIFIED = "Not specified"
DISCLAIMER = (
    "This analysis is generated by an AI screening system and is intended for "
    "screening purposes only. It is not a substitute for professional medical "
    "diagnosis. Please consult a qualified ophthalmologist or retinal specialist "
    "for a comprehensive eye examination and treatment decisions."
)


def report_filename(patient_info: PatientInfo, timestamp: str, ext: str = "txt") -> str:
    """Suggested export name, e.g. DR_Analysis_Report_P100_3-7-2025.txt."""
    date = format_date(parse_timestamp(timestamp)).replace("/", "-")
    return f"DR_Analysis_Report_{patient_info.id or 'Patient'}_{date}.{ext}"


class ReportComposer:
    """Turns a finished analysis into exportable reports.

    ``compose`` is pure: the date and time in the report come from the
    supplied timestamp, never the clock. The ``generate_*`` writers do the I/O.
    """

    def compose(
        self,
        result: PredictionResult,
        patient_info: PatientInfo,
        file_name: str,
        timestamp: str,
        model_accuracy: Optional[float] = None,
    ) -> str:
        return "\n".join(self._lines(result, patient_info, file_name, timestamp, model_accuracy)) + "\n"

    def _lines(self, result, patient_info, file_name, timestamp, model_accuracy) -> List[str]:
        moment = parse_timestamp(timestamp)
        lines = [
            REPORT_TITLE,
            "=" * len(REPORT_TITLE),
            "",
            "PATIENT INFORMATION:",
            f"Patient ID: {patient_info.id or NOT_PROVIDED}",
            f"Age: {patient_info.age + ' years' if patient_info.age else NOT_PROVIDED}",
            f"Eye: {patient_info.eye.label or NOT_SPECIFIED}",
            "",
            "ANALYSIS DETAILS:",
            f"Date: {format_date(moment)}",
            f"Time: {format_time(moment)}",
            f"Image File: {file_name}",
            "",
            "ANALYSIS RESULTS:",
            f"Classification: {result.label}",
            f"Confidence Level: {format_percent(result.confidence)}%",
            f"Severity: {result.severity.value.upper()}",
        ]
        if model_accuracy is not None:
            lines.append(f"Model Accuracy: {format_percent(model_accuracy)}%")

        lines.extend([
            "",
            "DESCRIPTION:",
            result.description,
            "",
            "RECOMMENDATION:",
            result.recommendation,
            "",
            f"URGENCY LEVEL: {result.urgency.value.upper()}",
            "",
            "DISCLAIMER:",
            DISCLAIMER,
            "",
            f"Generated by {APP_NAME} {APP_VERSION}",
        ])
        return lines

    def generate_txt(self, text: str, output_path: str) -> bool:
        """Write an already composed report to disk."""
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(text)
            logger.info("Wrote text report to %s", output_path)
            return True
        except OSError:
            logger.exception("Failed to write text report to %s", output_path)
            return False

    def generate_json(
        self,
        result: PredictionResult,
        patient_info: PatientInfo,
        file_name: str,
        timestamp: str,
        output_path: str,
        model_accuracy: Optional[float] = None,
    ) -> bool:
        """Write the structured result and its context as JSON."""
        data = {
            "tool": APP_NAME,
            "version": APP_VERSION,
            "timestamp": timestamp,
            "image_file": file_name,
            "patient": patient_info.to_dict(),
            "prediction": result.to_dict(),
            "model_accuracy": model_accuracy,
            "disclaimer": DISCLAIMER,
        }
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            logger.info("Wrote JSON report to %s", output_path)
            return True
        except OSError:
            logger.exception("Failed to write JSON report to %s", output_path)
            return False

    def generate_pdf(
        self,
        result: PredictionResult,
        patient_info: PatientInfo,
        file_name: str,
        timestamp: str,
        output_path: str,
        model_accuracy: Optional[float] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> bool:
        """Render the same sections as the text report into a PDF."""
        try:
            from reportlab.lib import colors
            from reportlab.lib.pagesizes import A4
            from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
            from reportlab.lib.units import mm
            from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
            from xml.sax.saxutils import escape

            if on_progress:
                on_progress(1, 3, "Creating PDF layout...")

            doc = SimpleDocTemplate(
                output_path,
                pagesize=A4,
                leftMargin=20 * mm,
                rightMargin=20 * mm,
                topMargin=20 * mm,
                bottomMargin=20 * mm,
            )
            styles = getSampleStyleSheet()
            meta_style = ParagraphStyle("Meta", parent=styles["Normal"], fontSize=10, textColor=colors.grey)
            moment = parse_timestamp(timestamp)

            elements = [
                Paragraph("Diabetic Retinopathy Analysis Report", styles["Title"]),
                Spacer(1, 4 * mm),
                Paragraph(f"Date: {format_date(moment)}  {format_time(moment)}", meta_style),
                Paragraph(f"Image File: {escape(file_name)}", meta_style),
                Spacer(1, 6 * mm),
                Paragraph("Patient Information", styles["Heading2"]),
                Paragraph(f"Patient ID: {escape(patient_info.id) or NOT_PROVIDED}", styles["Normal"]),
                Paragraph(
                    f"Age: {escape(patient_info.age) + ' years' if patient_info.age else NOT_PROVIDED}",
                    styles["Normal"],
                ),
                Paragraph(f"Eye: {patient_info.eye.label or NOT_SPECIFIED}", styles["Normal"]),
                Spacer(1, 6 * mm),
            ]

            if on_progress:
                on_progress(2, 3, "Adding results...")

            rows = [
                ["Classification", result.label],
                ["Confidence", f"{format_percent(result.confidence)}%"],
                ["Severity", result.severity.value.upper()],
                ["Urgency", result.urgency.value.upper()],
            ]
            if model_accuracy is not None:
                rows.append(["Model Accuracy", f"{format_percent(model_accuracy)}%"])
            table = Table(rows, colWidths=[120, 300])
            table.setStyle(TableStyle([
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("BACKGROUND", (0, 0), (0, -1), colors.HexColor("#EFF6FF")),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#E5E7EB")),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]))
            elements.extend([
                Paragraph("Analysis Results", styles["Heading2"]),
                table,
                Spacer(1, 6 * mm),
                Paragraph("Description", styles["Heading2"]),
                Paragraph(escape(result.description), styles["Normal"]),
                Paragraph("Recommendation", styles["Heading2"]),
                Paragraph(escape(result.recommendation), styles["Normal"]),
                Spacer(1, 10 * mm),
                Paragraph(DISCLAIMER, ParagraphStyle(
                    "Disclaimer",
                    parent=styles["Normal"],
                    fontSize=8,
                    textColor=colors.HexColor("#6B7280"),
                )),
            ])

            if on_progress:
                on_progress(3, 3, "Writing PDF...")

            doc.build(elements)
            logger.info("Wrote PDF report to %s", output_path)
            return True

        except Exception:
            logger.exception("Failed to write PDF report to %s", output_path)
            return False
