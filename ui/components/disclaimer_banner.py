"""Banners: the permanent screening disclaimer and the dismissible analysis error."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from i18n import t


class DisclaimerBanner(QWidget):
    """Amber warning banner with the screening disclaimer. Cannot be dismissed."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("disclaimerBanner")
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(10)

        icon_label = QLabel("⚠")
        icon_label.setFixedWidth(24)
        icon_label.setAlignment(Qt.AlignmentFlag.AlignTop)

        text_label = QLabel(t("disclaimer.banner"))
        text_label.setWordWrap(True)

        layout.addWidget(icon_label)
        layout.addWidget(text_label, 1)


class ErrorBanner(QWidget):
    """Red banner showing the message of a failed analysis."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("errorBanner")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(4)

        title = QLabel(f"✖  {t('analysis.error_title')}")
        title.setStyleSheet("font-weight: bold;")
        self._message_label = QLabel("")
        self._message_label.setWordWrap(True)

        layout.addWidget(title)
        layout.addWidget(self._message_label)
        self.hide()

    def show_message(self, message: str):
        self._message_label.setText(message)
        self.show()

    def clear(self):
        self._message_label.setText("")
        self.hide()
