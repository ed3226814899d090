"""Application settings tab: prediction service, language, theme."""

from PyQt6.QtWidgets import (
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.settings import ServiceSettings, load_service_settings, save_service_settings
from core.utils import APP_VERSION
from i18n import LANGUAGES, get_current_language, language_label, set_language, t
from ui.theme import ThemeManager


class SettingsWidget(QWidget):
    """User-facing settings for the prediction service, language, and theme."""

    def __init__(self, theme_manager: ThemeManager, parent=None):
        super().__init__(parent)
        self._theme_manager = theme_manager
        self._setup_ui()

    def _section_header(self, key: str) -> QLabel:
        header = QLabel(t(key))
        header.setProperty("class", "sectionTitle")
        header.setStyleSheet("font-size: 16px; margin-top: 12px;")
        return header

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("settings.title"))
        title.setProperty("class", "sectionTitle")
        layout.addWidget(title)

        # --- Service section ---
        layout.addWidget(self._section_header("settings.service"))
        service = load_service_settings()
        form = QFormLayout()
        self._url_edit = QLineEdit(service.url)
        self._timeout_spin = QDoubleSpinBox()
        self._timeout_spin.setRange(1.0, 600.0)
        self._timeout_spin.setSuffix(" s")
        self._timeout_spin.setValue(service.timeout)
        form.addRow(t("settings.service_url"), self._url_edit)
        form.addRow(t("settings.service_timeout"), self._timeout_spin)
        layout.addLayout(form)

        save_row = QHBoxLayout()
        save_btn = QPushButton(t("settings.save"))
        save_btn.setProperty("class", "secondaryButton")
        save_btn.clicked.connect(self._save_service)
        save_row.addWidget(save_btn)
        save_row.addStretch()
        layout.addLayout(save_row)

        # --- Language section ---
        layout.addWidget(self._section_header("settings.language"))
        lang_row = QHBoxLayout()
        self._lang_combo = QComboBox()
        current = get_current_language()
        for code in LANGUAGES:
            self._lang_combo.addItem(language_label(code), code)
            if code == current:
                self._lang_combo.setCurrentIndex(self._lang_combo.count() - 1)
        self._lang_combo.currentIndexChanged.connect(self._on_language_changed)
        lang_row.addWidget(self._lang_combo)
        lang_row.addStretch()
        layout.addLayout(lang_row)

        lang_note = QLabel(t("settings.language_restart"))
        lang_note.setStyleSheet("font-size: 11px; color: #888; font-style: italic;")
        layout.addWidget(lang_note)

        # --- Theme section ---
        layout.addWidget(self._section_header("settings.theme"))
        theme_row = QHBoxLayout()
        light_btn = QPushButton(t("settings.theme_light"))
        light_btn.setProperty("class", "secondaryButton")
        light_btn.clicked.connect(lambda: self._theme_manager.set_theme(ThemeManager.LIGHT))
        dark_btn = QPushButton(t("settings.theme_dark"))
        dark_btn.setProperty("class", "secondaryButton")
        dark_btn.clicked.connect(lambda: self._theme_manager.set_theme(ThemeManager.DARK))
        theme_row.addWidget(light_btn)
        theme_row.addWidget(dark_btn)
        theme_row.addStretch()
        layout.addLayout(theme_row)

        # --- About section ---
        layout.addWidget(self._section_header("settings.about"))
        about_text = QLabel(f"{t('about.description')}\n{t('about.version', version=APP_VERSION)}")
        about_text.setProperty("class", "sectionSubtitle")
        about_text.setWordWrap(True)
        layout.addWidget(about_text)

        layout.addStretch()
        scroll.setWidget(container)
        outer.addWidget(scroll)

    def _save_service(self):
        url = self._url_edit.text().strip()
        if not url.startswith(("http://", "https://")):
            QMessageBox.warning(self, t("common.error"), t("settings.invalid_url"))
            return
        save_service_settings(ServiceSettings(url=url, timeout=self._timeout_spin.value()))
        QMessageBox.information(self, t("common.success"), t("settings.saved"))

    def _on_language_changed(self, index: int):
        set_language(self._lang_combo.itemData(index))

    def cleanup(self):
        pass
