"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It keeps the parameter domains, timings and file names used by
   the model, the controllers and the view in one place.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (stylesheet) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    STYLESHEET_PATH (str): Absolute path to the Qt stylesheet.
"""
import sys
import os
from importlib.metadata import version, PackageNotFoundError
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/hologen/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


try:
    APP_VERSION = version("hologen")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

# Paths
ASSETS_PATH: str = get_resource_path("assets")
STYLESHEET_PATH: str = os.path.join(ASSETS_PATH, "theme.qss")

# Parameter domains and session defaults
QUALITY_MIN: int = 1
QUALITY_MAX: int = 100
INTENSITY_MIN: float = 0.0
INTENSITY_MAX: float = 3.0
INTENSITY_STEP: float = 0.1

DEFAULT_QUALITY: int = 80
DEFAULT_INTENSITY: float = 1.2

# Timings (milliseconds)
STAGE_INTERVAL_MS: int = 350
FRAME_INTERVAL_MS: int = 16

# Export
EXPORT_FILENAME: str = "HoloGen_Capture.png"
