"""Drag-and-drop zone for retinal images with a thumbnail preview."""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QDragEnterEvent, QDropEvent, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QFileDialog, QLabel, QVBoxLayout, QWidget

from core.image_intake import create_thumbnail
from core.utils import SUPPORTED_IMAGE_EXTENSIONS, UploadedImage, format_file_size
from i18n import t


class ImageDropZone(QWidget):
    """Emits the chosen path; the workflow decides whether the file is acceptable.

    The zone never validates files itself. It shows whatever UploadedImage
    the owner hands back through ``show_image``.
    """

    file_chosen = pyqtSignal(str)
    PREVIEW_SIZE = (320, 180)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._has_image = False
        self._drag_over = False
        self._locked = False
        self.setAcceptDrops(True)
        self.setObjectName("imageDropZone")
        self.setMinimumHeight(200)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._icon_label = QLabel("\U0001f4e4")
        self._icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._icon_label.setStyleSheet("font-size: 36px;")

        self._text_label = QLabel(t("upload.drop_text"))
        self._text_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._text_label.setWordWrap(True)

        self._preview_label = QLabel()
        self._preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview_label.setFixedHeight(180)
        self._preview_label.hide()

        self._file_info_label = QLabel()
        self._file_info_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._file_info_label.hide()

        layout.addWidget(self._icon_label)
        layout.addWidget(self._text_label)
        layout.addWidget(self._preview_label)
        layout.addWidget(self._file_info_label)

    def set_locked(self, locked: bool):
        """Ignore drops and clicks while a request is in flight."""
        self._locked = locked

    def show_image(self, image: UploadedImage):
        pixmap = QPixmap()
        if pixmap.loadFromData(create_thumbnail(image, self.PREVIEW_SIZE)):
            self._preview_label.setPixmap(pixmap)
        else:
            self._preview_label.setText(image.file_name)
        self._file_info_label.setText(f"{image.file_name} ({format_file_size(image.size_bytes)})")

        self._preview_label.show()
        self._file_info_label.show()
        self._icon_label.hide()
        self._text_label.hide()
        self._has_image = True
        self.update()

    def reset(self):
        """Back to the empty placeholder."""
        self._has_image = False
        self._preview_label.clear()
        self._preview_label.hide()
        self._file_info_label.hide()
        self._icon_label.show()
        self._text_label.show()
        self._drag_over = False
        self.update()

    def _browse_file(self):
        ext_filter = " ".join(f"*{e}" for e in sorted(SUPPORTED_IMAGE_EXTENSIONS))
        file_path, _ = QFileDialog.getOpenFileName(
            self, t("common.browse"), "", f"Retinal Images ({ext_filter});;All Files (*)"
        )
        if file_path:
            self.file_chosen.emit(file_path)

    # --- Drag and drop ---

    def dragEnterEvent(self, event: QDragEnterEvent):
        if not self._locked and event.mimeData().hasUrls():
            event.acceptProposedAction()
            self._drag_over = True
            self.update()

    def dragLeaveEvent(self, event):
        self._drag_over = False
        self.update()

    def dropEvent(self, event: QDropEvent):
        self._drag_over = False
        urls = event.mimeData().urls()
        if urls and not self._locked:
            self.file_chosen.emit(urls[0].toLocalFile())
        self.update()

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and not self._locked:
            self._browse_file()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        if self._drag_over:
            pen = QPen(QColor("#60A5FA"), 2, Qt.PenStyle.DashLine)
        elif self._has_image:
            pen = QPen(QColor("#34C759"), 2, Qt.PenStyle.SolidLine)
        else:
            pen = QPen(QColor("#9CA3AF"), 2, Qt.PenStyle.DashLine)

        pen.setDashPattern([8, 4])
        painter.setPen(pen)
        painter.drawRoundedRect(self.rect().adjusted(1, 1, -1, -1), 12, 12)
        painter.end()
