"""RetinaScan: diabetic retinopathy screening client.

Entry point for the desktop application.
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

import i18n
from core.logging_setup import setup_logging
from core.utils import APP_NAME, APP_VERSION, SETTINGS_ORG
from ui.theme import ThemeManager


def main():
    """Application entry point."""
    # Handle PyInstaller frozen app
    if getattr(sys, "frozen", False):
        os.chdir(os.path.dirname(sys.executable))

    setup_logging()
    logging.getLogger(__name__).info("Starting %s %s", APP_NAME, APP_VERSION)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(SETTINGS_ORG)

    i18n.init()

    theme_manager = ThemeManager(app)
    theme_manager.apply_theme()

    from ui.main_window import MainWindow

    window = MainWindow(theme_manager)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
