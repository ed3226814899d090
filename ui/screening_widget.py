"""Diabetic retinopathy screening tab: upload, patient details, analysis, results."""

import logging

from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.errors import PreconditionFailed
from core.prediction_client import PredictionClient
from core.report_composer import report_filename
from core.settings import load_service_settings
from core.workflow import (
    AnalysisWorkflow,
    Failed,
    Idle,
    Ready,
    Submitting,
    Succeeded,
    Validating,
)
from i18n import t
from ui.components.disclaimer_banner import DisclaimerBanner, ErrorBanner
from ui.components.image_drop_zone import ImageDropZone
from ui.components.patient_form import PatientForm
from ui.components.progress_widget import ProgressWidget
from ui.components.result_card import ResultCard
from workers.prediction_worker import PredictionWorker
from workers.report_worker import ReportWorker

logger = logging.getLogger(__name__)


class ScreeningWidget(QWidget):
    """Presentation for one AnalysisWorkflow. Everything shown derives from its state."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._workers = []
        self._report_worker: ReportWorker = None
        self._workflow = AnalysisWorkflow(on_state_changed=self._render)
        self._setup_ui()
        self._connect_signals()
        self._render(self._workflow.state)

    def _setup_ui(self):
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("screening.title"))
        title.setProperty("class", "sectionTitle")
        subtitle = QLabel(t("screening.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        self._drop_zone = ImageDropZone()

        patient_title = QLabel(t("patient.title"))
        patient_title.setStyleSheet("font-size: 16px; font-weight: bold; margin-top: 8px;")
        self._patient_form = PatientForm()

        self._error_banner = ErrorBanner()

        button_row = QHBoxLayout()
        self._analyze_btn = QPushButton(t("screening.analyze_button"))
        self._analyze_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton(t("screening.reset_button"))
        self._reset_btn.setProperty("class", "secondaryButton")
        button_row.addWidget(self._analyze_btn, 1)
        button_row.addWidget(self._reset_btn)

        self._progress = ProgressWidget()
        self._result_card = ResultCard()

        layout.addWidget(DisclaimerBanner())
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addWidget(self._drop_zone)
        layout.addWidget(patient_title)
        layout.addWidget(self._patient_form)
        layout.addWidget(self._error_banner)
        layout.addLayout(button_row)
        layout.addWidget(self._progress)
        layout.addWidget(self._result_card)
        layout.addStretch()

        scroll.setWidget(container)
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(scroll)

    def _connect_signals(self):
        self._drop_zone.file_chosen.connect(self._on_file_chosen)
        self._patient_form.changed.connect(self._workflow.set_patient_info)
        self._analyze_btn.clicked.connect(self._on_analyze)
        self._reset_btn.clicked.connect(self._on_reset)
        self._result_card.analyze_another.connect(self._on_reset)
        self._result_card.export_txt.connect(lambda o: self._export_report(o, "txt"))
        self._result_card.export_pdf.connect(lambda o: self._export_report(o, "pdf"))
        self._result_card.export_json.connect(lambda o: self._export_report(o, "json"))

    # --- Inbound events ---

    def _on_file_chosen(self, path: str):
        error = self._workflow.select(path)
        if error is not None:
            QMessageBox.warning(self, t("common.error"), error.message)

    def _on_analyze(self):
        try:
            pending = self._workflow.submit()
        except PreconditionFailed as e:
            QMessageBox.warning(self, t("common.error"), e.message)
            return
        if pending is None:
            return

        service = load_service_settings()
        client = PredictionClient(service.predict_url, timeout=service.timeout)
        worker = PredictionWorker(client, pending, parent=self)
        worker.finished.connect(self._on_response)
        worker.finished.connect(lambda *_: self._release_worker(worker))
        self._workers.append(worker)
        worker.start()

    def _on_response(self, token: int, response):
        self._workflow.complete(token, response)

    def _on_reset(self):
        self._workflow.reset()

    def _release_worker(self, worker: PredictionWorker):
        if worker in self._workers:
            self._workers.remove(worker)
        # finished is emitted from run(); let the thread actually exit first
        worker.wait(2000)
        worker.deleteLater()

    # --- Rendering ---

    def _render(self, state):
        """Map a workflow state onto the widgets. No other code toggles them."""
        busy = isinstance(state, (Submitting, Validating))
        self._analyze_btn.setEnabled(isinstance(state, (Ready, Failed, Succeeded)))
        self._analyze_btn.setText(
            t("screening.analyzing_button") if isinstance(state, Submitting)
            else t("screening.analyze_button")
        )
        self._drop_zone.set_locked(busy)
        self._patient_form.setEnabled(not busy)

        image = getattr(state, "image", None)
        if image is not None:
            self._drop_zone.show_image(image)
        elif not isinstance(state, Validating):
            self._drop_zone.reset()

        if isinstance(state, Idle):
            self._patient_form.set_info(self._workflow.patient_info)

        if isinstance(state, Submitting):
            self._progress.start()
        else:
            self._progress.reset()

        if isinstance(state, Failed):
            self._error_banner.show_message(state.message)
        else:
            self._error_banner.clear()

        if isinstance(state, Succeeded):
            self._result_card.show_result(state)
        else:
            self._result_card.reset()

    # --- Export ---

    def _export_report(self, outcome: Succeeded, fmt: str):
        if outcome is None:
            return
        title = t(f"export.save_{fmt}_title")
        suggested = report_filename(outcome.patient_info, outcome.timestamp, ext=fmt)
        path, _ = QFileDialog.getSaveFileName(self, title, suggested, f"*.{fmt}")
        if not path:
            return
        logger.info("Exporting %s report", fmt.upper())
        self._report_worker = ReportWorker(outcome, path, format=fmt, parent=self)
        self._report_worker.progress.connect(self._progress.update_progress)
        self._report_worker.finished.connect(self._on_export_finished)
        self._report_worker.error.connect(self._on_export_error)
        self._report_worker.start()

    def _on_export_finished(self, path: str):
        self._progress.reset()
        QMessageBox.information(self, t("common.success"), t("export.success", path=path))

    def _on_export_error(self, message: str):
        self._progress.reset()
        QMessageBox.warning(self, t("common.error"), message)

    def cleanup(self):
        for worker in list(self._workers):
            if worker.isRunning():
                worker.wait(5000)
        if self._report_worker and self._report_worker.isRunning():
            self._report_worker.wait(3000)
