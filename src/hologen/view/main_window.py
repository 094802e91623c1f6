"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the Control Panel, the 3D
Viewport and the overlays.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (Open, Export, drag-and-drop) to the
   session and the viewport.
"""
import os
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QSettings
from PySide6.QtGui import QAction, QCloseEvent, QDragEnterEvent, QDragLeaveEvent, QDropEvent, QResizeEvent

from hologen.config import EXPORT_FILENAME
from hologen.controller.session import Session
from hologen.view.widgets.control_panel import ControlPanel
from hologen.view.widgets.overlays import DropOverlay, ProcessingOverlay
from hologen.view.widgets.viewport import SculptureViewport


VISIBLE_APP_NAME = "HoloGen"
IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tif *.tiff);;All Files (*)"

SETTINGS_OPEN_DIR = "paths/last_open_dir"
SETTINGS_EXPORT_DIR = "paths/last_export_dir"


class MainWindow(QMainWindow):
    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session: Session = session
        self.settings = QSettings()

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)
        self.setAcceptDrops(True)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.control_panel = ControlPanel(self.session)
        splitter.addWidget(self.control_panel)

        # --- RIGHT SIDE: 3D Visualization ---
        self.viewport = SculptureViewport(self.session)
        splitter.addWidget(self.viewport)

        # Set initial proportions (1 part sidebar : 4 parts 3D view)
        splitter.setSizes([320, 1080])

        # --- OVERLAYS (cover the whole central widget) ---
        self.processing_overlay = ProcessingOverlay(main_widget)
        self.drop_overlay = DropOverlay(main_widget)

        # --- SIGNAL CONNECTIONS ---
        self.control_panel.image_requested.connect(self.on_file_open)
        self.control_panel.export_requested.connect(self.on_export_capture)

        self.session.busy_changed.connect(self.on_busy_changed)
        self.session.stage_emitted.connect(self.on_stage_emitted)
        self.session.decode_failed.connect(self.on_decode_failed)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self.statusBar().showMessage("Demo mesh. Drop an image to sculpt it.")

    def _create_actions(self) -> None:
        self.act_open = QAction("Open Image...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_export = QAction("Export Capture...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_capture)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- SESSION SLOTS ---

    def on_busy_changed(self, busy: bool) -> None:
        self.act_open.setEnabled(not busy)
        if busy:
            self.processing_overlay.clear()
            self._cover(self.processing_overlay)
            self.processing_overlay.show()
            self.processing_overlay.raise_()
            self.statusBar().showMessage("Synthesizing...")
        else:
            self.processing_overlay.hide()
            if self.session.parameters.has_image:
                self.statusBar().showMessage(f"Sculpting '{self.session.parameters.active_image.name}'.")

    def on_stage_emitted(self, index: int, label: str) -> None:
        self.processing_overlay.append_stage(index, label)

    def on_decode_failed(self, message: str) -> None:
        self.statusBar().showMessage(f"Image could not be loaded: {message}", 8000)

    # --- FILE SLOTS ---

    def on_file_open(self) -> None:
        if self.session.is_busy:
            return
        start_dir = str(self.settings.value(SETTINGS_OPEN_DIR, ""))
        fname, _ = QFileDialog.getOpenFileName(self, "Select Image File", start_dir, IMAGE_FILTER)
        if fname:
            self.settings.setValue(SETTINGS_OPEN_DIR, os.path.dirname(fname))
            self.session.submit_path(fname)

    def on_export_capture(self) -> None:
        start_dir = str(self.settings.value(SETTINGS_EXPORT_DIR, ""))
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Capture", os.path.join(start_dir, EXPORT_FILENAME), "PNG Images (*.png)"
        )
        if not fname:
            return

        # Ensure extension
        if not fname.lower().endswith(".png"):
            fname += ".png"

        try:
            self.viewport.export_capture(fname)
            self.settings.setValue(SETTINGS_EXPORT_DIR, os.path.dirname(fname))
            self.statusBar().showMessage(f"Capture saved to {fname}", 5000)
        except Exception as e:
            QMessageBox.critical(self, "Export Error", f"Could not export the capture:\n{e}")

    # --- DRAG & DROP ---

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
            self._cover(self.drop_overlay)
            self.drop_overlay.show()
            self.drop_overlay.raise_()
        else:
            event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        self.drop_overlay.hide()
        event.accept()

    def dropEvent(self, event: QDropEvent) -> None:
        self.drop_overlay.hide()
        path = self._first_local_file(event)
        if path:
            event.acceptProposedAction()
            self.session.submit_path(path)
        else:
            event.ignore()

    @staticmethod
    def _first_local_file(event: QDropEvent) -> Optional[str]:
        for url in event.mimeData().urls():
            if url.isLocalFile():
                return url.toLocalFile()
        return None

    # --- WINDOW ---

    def _cover(self, overlay: QWidget) -> None:
        overlay.setGeometry(self.centralWidget().rect())

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._cover(self.processing_overlay)
        self._cover(self.drop_overlay)

    def closeEvent(self, event: QCloseEvent, /) -> None:
        """Stop pending synthesis ticks before the widgets go away."""
        self.session.close()

        # Close the PyVista plotter safely
        if self.viewport:
            self.viewport.shutdown()

        event.accept()
