"""Circular confidence gauge with animated fill."""

from PyQt6.QtCore import QPropertyAnimation, QEasingCurve, QRectF, Qt, pyqtProperty
from PyQt6.QtGui import QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from core.utils import format_percent


class ConfidenceGauge(QWidget):
    """Animated circular gauge for a 0-100 confidence figure.

    The arc color is supplied by the caller, normally the severity style.
    """

    COLOR_BG = QColor("#E5E7EB")

    def __init__(self, label: str = "", size: int = 120, parent=None):
        super().__init__(parent)
        self._label = label
        self._size = size
        self._percent = 0.0
        self._animated = 0.0
        self._color = QColor("#2563EB")
        self.setFixedSize(size, size)

        self._animation = QPropertyAnimation(self, b"animatedPercent")
        self._animation.setDuration(800)
        self._animation.setEasingCurve(QEasingCurve.Type.OutCubic)

    def set_value(self, percent: float, color: str = ""):
        """Animate to ``percent`` (clamped to 0-100)."""
        self._percent = max(0.0, min(100.0, percent))
        if color:
            self._color = QColor(color)
        self._animation.setStartValue(self._animated)
        self._animation.setEndValue(self._percent)
        self._animation.start()

    def _get_animated(self) -> float:
        return self._animated

    def _set_animated(self, value: float):
        self._animated = value
        self.update()

    animatedPercent = pyqtProperty(float, _get_animated, _set_animated)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        pen_width = 10
        margin = pen_width / 2 + 4
        rect = QRectF(margin, margin, self._size - 2 * margin, self._size - 2 * margin)

        painter.setPen(QPen(self.COLOR_BG, pen_width, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap))
        painter.drawArc(rect, 225 * 16, -270 * 16)

        painter.setPen(QPen(self._color, pen_width, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap))
        painter.drawArc(rect, 225 * 16, int(-270 * (self._animated / 100.0) * 16))

        # Final value once settled, so 91.8 reads as 91.8 and not 91
        shown = self._percent if abs(self._animated - self._percent) < 0.05 else self._animated
        painter.setPen(QPen(self._color))
        font = QFont()
        font.setPixelSize(int(self._size * 0.2))
        font.setBold(True)
        painter.setFont(font)
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, f"{format_percent(shown)}%")

        if self._label:
            painter.setPen(QPen(QColor("#888888")))
            label_font = QFont()
            label_font.setPixelSize(int(self._size * 0.1))
            painter.setFont(label_font)
            label_rect = QRectF(rect.x(), rect.center().y() + 12, rect.width(), 20)
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop, self._label)

        painter.end()

    def reset(self):
        self._animation.stop()
        self._animated = 0.0
        self._percent = 0.0
        self.update()
