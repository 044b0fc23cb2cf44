from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication

import os
import sys
from typing import Optional, Sequence

ORG_ID = "quakeviz"
APP_ID = "quakeviz"

VISIBLE_APP_NAME = "Live Earthquake Visualizer"


def create_app(argv: Optional[Sequence[str]] = None) -> QApplication:
    """Create and configure the QApplication instance (or return the running one)."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    app = QApplication.instance()
    if app is None:
        QCoreApplication.setOrganizationName(ORG_ID)
        QCoreApplication.setApplicationName(APP_ID)
        app = QApplication(list(argv) if argv is not None else sys.argv)

    app.setApplicationDisplayName(VISIBLE_APP_NAME)
    return app
