"""Busy indicator shown while a prediction request is in flight."""

from PyQt6.QtWidgets import QLabel, QProgressBar, QVBoxLayout, QWidget

from i18n import t


class ProgressWidget(QWidget):
    """Indeterminate progress bar with a status line.

    The service reports no intermediate progress, so the bar only pulses.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 8)
        layout.setSpacing(8)

        self._bar = QProgressBar()
        self._bar.setTextVisible(False)
        self._bar.setFixedHeight(8)

        self._status_label = QLabel("")
        self._detail_label = QLabel("")
        self._detail_label.setStyleSheet("font-size: 11px; color: #888;")

        layout.addWidget(self._bar)
        layout.addWidget(self._status_label)
        layout.addWidget(self._detail_label)
        self.hide()

    def start(self, message: str = ""):
        self._bar.setRange(0, 0)
        self._status_label.setText(message or t("progress.analyzing"))
        self._detail_label.setText(t("progress.analyzing_detail"))
        self.show()

    def update_progress(self, current: int, total: int, message: str):
        """Switch to determinate mode, used by report export."""
        self._bar.setRange(0, 100)
        pct = min(int(current / total * 100) if total > 0 else 0, 100)
        self._bar.setValue(pct)
        self._status_label.setText(message)
        self._detail_label.setText("")
        self.show()

    def reset(self):
        self._bar.setRange(0, 100)
        self._bar.setValue(0)
        self._status_label.setText("")
        self._detail_label.setText("")
        self.hide()
