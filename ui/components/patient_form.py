"""Optional patient details: identifier, age, and eye laterality."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QIntValidator
from PyQt6.QtWidgets import QComboBox, QFormLayout, QLineEdit, QWidget

from core.utils import Eye, PatientInfo
from i18n import t


class PatientForm(QWidget):
    """Emits a fresh PatientInfo whenever any field is edited."""

    changed = pyqtSignal(object)   # PatientInfo

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QFormLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._id_edit = QLineEdit()
        self._id_edit.setPlaceholderText(t("patient.id_placeholder"))

        self._age_edit = QLineEdit()
        self._age_edit.setPlaceholderText(t("patient.age_placeholder"))
        self._age_edit.setValidator(QIntValidator(0, 150, self))

        self._eye_combo = QComboBox()
        self._eye_combo.addItem(t("patient.eye_unset"), Eye.UNSET.value)
        self._eye_combo.addItem(t("patient.eye_left"), Eye.LEFT.value)
        self._eye_combo.addItem(t("patient.eye_right"), Eye.RIGHT.value)

        layout.addRow(t("patient.id"), self._id_edit)
        layout.addRow(t("patient.age"), self._age_edit)
        layout.addRow(t("patient.eye"), self._eye_combo)

        self._id_edit.textEdited.connect(self._emit)
        self._age_edit.textEdited.connect(self._emit)
        self._eye_combo.activated.connect(self._emit)

    def info(self) -> PatientInfo:
        return PatientInfo(
            id=self._id_edit.text(),
            age=self._age_edit.text(),
            eye=Eye(self._eye_combo.currentData()),
        )

    def set_info(self, info: PatientInfo):
        """Show ``info`` without emitting ``changed``."""
        self._id_edit.setText(info.id)
        self._age_edit.setText(info.age)
        self._eye_combo.setCurrentIndex(max(self._eye_combo.findData(info.eye.value), 0))

    def _emit(self, *_):
        self.changed.emit(self.info())
