"""Theme manager and severity/urgency style lookup for RetinaScan."""

import sys
from dataclasses import dataclass

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from core.utils import SETTINGS_APP, SETTINGS_ORG, Severity, Urgency, get_asset_path


@dataclass(frozen=True)
class StyleDescriptor:
    """Colors and glyph used to render a severity or urgency badge."""
    text: str
    background: str
    border: str
    icon: str

    def stylesheet(self) -> str:
        return (
            f"color: {self.text}; background-color: {self.background}; "
            f"border: 2px solid {self.border}; border-radius: 8px; padding: 12px;"
        )


SEVERITY_STYLES = {
    Severity.NONE: StyleDescriptor("#16A34A", "#F0FDF4", "#BBF7D0", "✔"),
    Severity.MILD: StyleDescriptor("#2563EB", "#EFF6FF", "#BFDBFE", "\U0001f441"),
    Severity.MODERATE: StyleDescriptor("#CA8A04", "#FEFCE8", "#FEF08A", "⚠"),
    Severity.SEVERE: StyleDescriptor("#EA580C", "#FFF7ED", "#FED7AA", "⚠"),
    Severity.PROLIFERATIVE: StyleDescriptor("#DC2626", "#FEF2F2", "#FECACA", "✖"),
}

URGENCY_STYLES = {
    Urgency.ROUTINE: StyleDescriptor("#16A34A", "#F0FDF4", "#BBF7D0", "\U0001f4c5"),
    Urgency.MODERATE: StyleDescriptor("#CA8A04", "#FEFCE8", "#FEF08A", "⏳"),
    Urgency.URGENT: StyleDescriptor("#EA580C", "#FFF7ED", "#FED7AA", "❗"),
    Urgency.EMERGENCY: StyleDescriptor("#DC2626", "#FEF2F2", "#FECACA", "\U0001f6a8"),
}


def severity_style(severity: Severity) -> StyleDescriptor:
    return SEVERITY_STYLES[severity]


def urgency_style(urgency: Urgency) -> StyleDescriptor:
    return URGENCY_STYLES[urgency]


class ThemeManager:
    """Manages light/dark theme switching via QSS stylesheets."""

    LIGHT = "light"
    DARK = "dark"

    def __init__(self, app: QApplication):
        self._app = app
        self._settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        self._current_theme = self._settings.value("theme", self.LIGHT)
        self._setup_font()

    def _setup_font(self):
        """Set system-native fonts per platform."""
        if sys.platform == "darwin":
            font = QFont(".AppleSystemUIFont", 13)
        elif sys.platform == "win32":
            font = QFont("Segoe UI", 10)
        else:
            font = QFont("Ubuntu", 10)
        font.setHintingPreference(QFont.HintingPreference.PreferNoHinting)
        self._app.setFont(font)

    def apply_theme(self, theme: str = None):
        """Load and apply a QSS theme file."""
        if theme:
            self._current_theme = theme
        qss = self._load_qss(f"{self._current_theme}.qss")
        self._app.setStyleSheet(qss)
        self._settings.setValue("theme", self._current_theme)

    def set_theme(self, mode: str):
        """Set theme to 'light' or 'dark'."""
        self.apply_theme(mode)

    def toggle_theme(self) -> str:
        new_theme = self.DARK if self._current_theme == self.LIGHT else self.LIGHT
        self.apply_theme(new_theme)
        return new_theme

    @property
    def current_theme(self) -> str:
        return self._current_theme

    @staticmethod
    def _load_qss(filename: str) -> str:
        """Load a QSS file from assets/styles/."""
        qss_path = get_asset_path(f"assets/styles/{filename}")
        try:
            with open(qss_path, "r") as f:
                return f.read()
        except FileNotFoundError:
            return ""
