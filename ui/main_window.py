"""Main application window with sidebar navigation and stacked content."""

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from i18n import t
from ui.screening_widget import ScreeningWidget
from ui.settings_widget import SettingsWidget
from ui.theme import ThemeManager


class MainWindow(QMainWindow):
    """Sidebar on the left, screening or settings on the right."""

    SCREENING = 0
    SETTINGS = 1

    def __init__(self, theme_manager: ThemeManager):
        super().__init__()
        self._theme_manager = theme_manager
        self._nav_buttons = []
        self.setWindowTitle(t("app.title"))
        self.setMinimumSize(900, 620)
        self.resize(1060, 760)
        self._setup_ui()
        self._setup_menu_bar()
        self._switch_tab(self.SCREENING)

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.addWidget(self._create_sidebar())

        self._stack = QStackedWidget()
        self._stack.setObjectName("contentArea")
        self._screening_widget = ScreeningWidget()
        self._settings_widget = SettingsWidget(self._theme_manager)
        self._stack.addWidget(self._screening_widget)
        self._stack.addWidget(self._settings_widget)
        main_layout.addWidget(self._stack, 1)

    def _create_sidebar(self) -> QWidget:
        sidebar = QWidget()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(220)

        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(12, 16, 12, 16)
        layout.setSpacing(4)

        logo = QLabel(t("app.title"))
        logo.setObjectName("sidebarLogo")
        layout.addWidget(logo)

        subtitle = QLabel(t("app.subtitle"))
        subtitle.setStyleSheet("font-size: 11px; color: #888; padding-bottom: 12px;")
        subtitle.setWordWrap(True)
        layout.addWidget(subtitle)

        for index, label, icon in (
            (self.SCREENING, t("sidebar.screening"), "\U0001f441"),
            (self.SETTINGS, t("sidebar.settings"), "⚙️"),
        ):
            btn = QPushButton(f"  {icon}  {label}")
            btn.setProperty("class", "navButton")
            btn.clicked.connect(lambda checked, idx=index: self._switch_tab(idx))
            layout.addWidget(btn)
            self._nav_buttons.append(btn)
            if index == self.SCREENING:
                layout.addStretch()

        return sidebar

    def _switch_tab(self, index: int):
        self._stack.setCurrentIndex(index)
        for i, btn in enumerate(self._nav_buttons):
            btn.setProperty("active", "true" if i == index else "false")
            btn.style().unpolish(btn)
            btn.style().polish(btn)

    def _setup_menu_bar(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu(t("menu.file"))
        quit_action = QAction(t("menu.quit"), self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu(t("menu.view"))
        toggle_theme = QAction(t("menu.toggle_dark_mode"), self)
        toggle_theme.setShortcut("Ctrl+D")
        toggle_theme.triggered.connect(self._theme_manager.toggle_theme)
        view_menu.addAction(toggle_theme)

        nav_menu = menu_bar.addMenu(t("menu.navigate"))
        for label, shortcut, index in (
            (t("sidebar.screening"), "Ctrl+1", self.SCREENING),
            (t("sidebar.settings"), "Ctrl+,", self.SETTINGS),
        ):
            action = QAction(label, self)
            action.setShortcut(shortcut)
            action.triggered.connect(lambda checked, i=index: self._switch_tab(i))
            nav_menu.addAction(action)

    def closeEvent(self, event):
        """Let background workers finish before closing."""
        self._screening_widget.cleanup()
        self._settings_widget.cleanup()
        QApplication.processEvents()
        event.accept()
