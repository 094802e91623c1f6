"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Session (the state every other object works on).
2. Instantiates the Main Window (View).
3. Passes the Session into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

from hologen.config import APP_VERSION, STYLESHEET_PATH
from hologen.controller.session import Session
from hologen.logging_config import setup_logging
from hologen.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)

ORG_ID = "hologen"
APP_ID = "hologen"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hologen",
        description="Turn a single image into a real-time displacement sculpture.",
    )
    parser.add_argument("image", nargs="?", help="image file to sculpt right away")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser.parse_args(argv)


def create_app(argv: list[str]) -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    if os.path.exists(STYLESHEET_PATH):
        with open(STYLESHEET_PATH, encoding="utf-8") as f:
            app.setStyleSheet(f.read())
    else:
        logger.warning(f"Stylesheet not found at {STYLESHEET_PATH}, using the default Qt style.")

    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app([sys.argv[0]])

    # 3. Initialize the Session (parameters + synthesis state machine)
    session = Session()

    # 4. Initialize the Main Window, passing the session
    window = MainWindow(session)
    window.show()

    if args.image:
        session.submit_path(args.image)

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
