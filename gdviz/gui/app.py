"""
Application entry point and setup.
"""

import sys
from typing import Optional
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

# Configure PyQtGraph before importing any plot modules
import pyqtgraph as pg
pg.setConfigOptions(
    useOpenGL=False,           # Disable OpenGL to prevent rendering issues
    antialias=True,            # Smooth candidate line and contours
    imageAxisOrder='col-major',
)

from .main_window import MainWindow
from ..core.settings import AppConfig


def create_app() -> QApplication:
    """Create and configure the QApplication."""
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("gdviz")
    app.setOrganizationName("gdviz")
    return app


def run_app(config: Optional[AppConfig] = None, auto_start: bool = False) -> int:
    """Run the gdviz application."""
    app = create_app()

    window = MainWindow(config=config)
    window.show()
    if auto_start:
        window.toggle_running()

    return app.exec()
