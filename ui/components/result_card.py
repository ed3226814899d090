"""Analysis result card: classification, confidence, recommendation, urgency, exports."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.utils import format_date, format_percent, format_time, parse_timestamp
from core.workflow import Succeeded
from i18n import t
from ui.components.confidence_gauge import ConfidenceGauge
from ui.components.disclaimer_banner import DisclaimerBanner
from ui.theme import severity_style, urgency_style


class ResultCard(QWidget):
    """Displays a Succeeded outcome with export options."""

    export_pdf = pyqtSignal(object)    # Succeeded
    export_json = pyqtSignal(object)   # Succeeded
    export_txt = pyqtSignal(object)    # Succeeded
    analyze_another = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("resultCard")
        self._outcome = None
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(14)

        header_row = QHBoxLayout()
        header_row.setSpacing(20)
        self._gauge = ConfidenceGauge(label=t("results.confidence"), size=120)

        self._classification_box = QWidget()
        box_layout = QVBoxLayout(self._classification_box)
        self._class_label = QLabel("")
        self._class_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        self._class_label.setWordWrap(True)
        self._description_label = QLabel("")
        self._description_label.setWordWrap(True)
        box_layout.addWidget(self._class_label)
        box_layout.addWidget(self._description_label)

        header_row.addWidget(self._gauge)
        header_row.addWidget(self._classification_box, 1)

        self._recommendation_label = QLabel("")
        self._recommendation_label.setWordWrap(True)

        self._urgency_label = QLabel("")
        self._meta_label = QLabel("")
        self._meta_label.setStyleSheet("font-size: 12px; color: #888;")
        self._patient_label = QLabel("")
        self._patient_label.setWordWrap(True)

        self._disclaimer = DisclaimerBanner()

        export_row = QHBoxLayout()
        export_row.setSpacing(8)

        self._txt_btn = QPushButton(t("results.export_txt"))
        self._txt_btn.setProperty("class", "secondaryButton")
        self._txt_btn.clicked.connect(lambda: self.export_txt.emit(self._outcome))

        self._pdf_btn = QPushButton(t("results.export_pdf"))
        self._pdf_btn.setProperty("class", "secondaryButton")
        self._pdf_btn.clicked.connect(lambda: self.export_pdf.emit(self._outcome))

        self._json_btn = QPushButton(t("results.export_json"))
        self._json_btn.setProperty("class", "secondaryButton")
        self._json_btn.clicked.connect(lambda: self.export_json.emit(self._outcome))

        export_row.addWidget(self._txt_btn)
        export_row.addWidget(self._pdf_btn)
        export_row.addWidget(self._json_btn)
        export_row.addStretch()

        self._another_btn = QPushButton(t("results.analyze_another"))
        self._another_btn.setObjectName("primaryButton")
        self._another_btn.clicked.connect(self.analyze_another.emit)
        export_row.addWidget(self._another_btn)

        layout.addLayout(header_row)
        layout.addWidget(QLabel(f"<b>{t('results.recommendation')}</b>"))
        layout.addWidget(self._recommendation_label)
        layout.addWidget(self._urgency_label)
        layout.addWidget(self._patient_label)
        layout.addWidget(self._meta_label)
        layout.addWidget(self._disclaimer)
        layout.addLayout(export_row)

    def show_result(self, outcome: Succeeded):
        self._outcome = outcome
        result = outcome.result
        sev = severity_style(result.severity)
        urg = urgency_style(result.urgency)

        self._gauge.set_value(result.confidence, sev.text)
        self._classification_box.setStyleSheet(sev.stylesheet())
        self._class_label.setText(f"{sev.icon}  {result.label}")
        self._description_label.setText(result.description)
        self._recommendation_label.setText(result.recommendation)
        self._urgency_label.setText(
            f"{urg.icon}  {t('results.urgency', level=result.urgency.value.upper())}"
        )
        self._urgency_label.setStyleSheet(urg.stylesheet())

        patient = outcome.patient_info
        parts = []
        if patient.id:
            parts.append(t("results.patient_id", id=patient.id))
        if patient.age:
            parts.append(t("results.patient_age", age=patient.age))
        if patient.eye.label:
            parts.append(t("results.patient_eye", eye=patient.eye.label))
        self._patient_label.setText("  |  ".join(parts))
        self._patient_label.setVisible(bool(parts))

        moment = parse_timestamp(outcome.timestamp)
        meta = [f"{format_date(moment)} {format_time(moment)}", outcome.image.file_name]
        if outcome.model_accuracy is not None:
            meta.append(t("results.model_accuracy", accuracy=format_percent(outcome.model_accuracy)))
        self._meta_label.setText("  |  ".join(meta))

        self.show()

    def reset(self):
        self._outcome = None
        self._gauge.reset()
        self.hide()
