"""Background worker for report export."""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from core.report_composer import ReportComposer
from core.workflow import Succeeded

logger = logging.getLogger(__name__)


class ReportWorker(QThread):
    """Writes a report for a finished analysis in a background thread."""

    progress = pyqtSignal(int, int, str)
    finished = pyqtSignal(str)            # output_path
    error = pyqtSignal(str)

    def __init__(
        self,
        outcome: Succeeded,
        output_path: str,
        format: str = "txt",
        parent=None,
    ):
        super().__init__(parent)
        self._outcome = outcome
        self._output_path = output_path
        self._format = format

    def run(self):
        try:
            composer = ReportComposer()
            outcome = self._outcome
            args = (
                outcome.result,
                outcome.patient_info,
                outcome.image.file_name,
                outcome.timestamp,
            )

            if self._format == "txt":
                text = composer.compose(*args, model_accuracy=outcome.model_accuracy)
                success = composer.generate_txt(text, self._output_path)
            elif self._format == "json":
                success = composer.generate_json(
                    *args, self._output_path, model_accuracy=outcome.model_accuracy
                )
            elif self._format == "pdf":
                success = composer.generate_pdf(
                    *args, self._output_path,
                    model_accuracy=outcome.model_accuracy,
                    on_progress=lambda s, t, m: self.progress.emit(s, t, m),
                )
            else:
                self.error.emit(f"Unknown format: {self._format}")
                return

            if success:
                self.finished.emit(self._output_path)
            else:
                self.error.emit(f"Failed to generate {self._format.upper()} report.")
        except Exception as e:
            logger.exception("Report export to %s failed", self._output_path)
            self.error.emit(str(e))
