"""
Sculpture Control Panel
"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QSlider, QGroupBox
)
from PySide6.QtCore import Signal, Qt

from hologen.config import (
    APP_VERSION, QUALITY_MIN, QUALITY_MAX, INTENSITY_MIN, INTENSITY_MAX, INTENSITY_STEP,
)
from hologen.controller.session import Session
from hologen.model.parameters import ParameterState

# Sliders are integer-only; intensity is stored in tenths
INTENSITY_TICKS = round(1 / INTENSITY_STEP)


class ControlPanel(QWidget):
    image_requested = Signal()
    export_requested = Signal()

    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session = session
        self.setObjectName("controlPanel")

        layout = QVBoxLayout(self)

        lbl_title = QLabel("Holo<span style='color:#00F0FF'>Gen</span>")
        lbl_title.setObjectName("appTitle")
        lbl_title.setTextFormat(Qt.RichText)
        layout.addWidget(lbl_title)

        # --- Input Source ---
        grp_input = QGroupBox("Input Source")
        l_input = QVBoxLayout(grp_input)

        self.btn_image = QPushButton("Select Image File")
        self.btn_image.setMinimumHeight(48)
        self.btn_image.clicked.connect(self.image_requested)
        l_input.addWidget(self.btn_image)

        layout.addWidget(grp_input)

        # --- Digital Sculpture ---
        grp_sculpt = QGroupBox("Digital Sculpture")
        l_sculpt = QVBoxLayout(grp_sculpt)

        self.lbl_quality = QLabel()
        self.slider_quality = QSlider(Qt.Horizontal)
        self.slider_quality.setRange(QUALITY_MIN, QUALITY_MAX)
        self.slider_quality.valueChanged.connect(self.on_quality_changed)
        l_sculpt.addLayout(self._captioned("RES / POLY COUNT", self.lbl_quality))
        l_sculpt.addWidget(self.slider_quality)

        self.lbl_intensity = QLabel()
        self.slider_intensity = QSlider(Qt.Horizontal)
        self.slider_intensity.setRange(
            round(INTENSITY_MIN * INTENSITY_TICKS), round(INTENSITY_MAX * INTENSITY_TICKS)
        )
        self.slider_intensity.valueChanged.connect(self.on_intensity_changed)
        l_sculpt.addLayout(self._captioned("3D DEPTH SCALE", self.lbl_intensity))
        l_sculpt.addWidget(self.slider_intensity)

        layout.addWidget(grp_sculpt)

        # --- View Mode ---
        grp_view = QGroupBox("View Mode")
        l_view = QVBoxLayout(grp_view)

        self.btn_wireframe = QPushButton()
        self.btn_wireframe.setCheckable(True)
        self.btn_wireframe.setMinimumHeight(40)
        self.btn_wireframe.toggled.connect(self.on_wireframe_toggled)
        l_view.addWidget(self.btn_wireframe)

        layout.addWidget(grp_view)

        layout.addStretch()

        # --- Export ---
        self.btn_export = QPushButton("EXPORT_CAPTURE.PNG")
        self.btn_export.setObjectName("exportButton")
        self.btn_export.setMinimumHeight(48)
        self.btn_export.clicked.connect(self.export_requested)
        layout.addWidget(self.btn_export)

        lbl_version = QLabel(f"System Core // v{APP_VERSION}")
        lbl_version.setObjectName("versionLabel")
        lbl_version.setAlignment(Qt.AlignCenter)
        layout.addWidget(lbl_version)

        # --- Session sync ---
        self.session.parameters_changed.connect(self.load_from_state)
        self.session.busy_changed.connect(self.set_busy)

        self.load_from_state(self.session.parameters)
        self.set_busy(self.session.is_busy)

    @staticmethod
    def _captioned(caption: str, value_label: QLabel) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addWidget(QLabel(caption))
        row.addStretch()
        row.addWidget(value_label)
        return row

    # --- SLOTS ---

    def on_quality_changed(self, value: int) -> None:
        self.session.set_quality(value)

    def on_intensity_changed(self, ticks: int) -> None:
        self.session.set_intensity(ticks / INTENSITY_TICKS)

    def on_wireframe_toggled(self, checked: bool) -> None:
        self.session.set_wireframe(checked)

    def load_from_state(self, params: ParameterState) -> None:
        """Syncs the widgets from the session parameters without echoing back."""
        for w in (self.slider_quality, self.slider_intensity, self.btn_wireframe):
            w.blockSignals(True)
        try:
            self.slider_quality.setValue(params.quality)
            self.slider_intensity.setValue(round(params.intensity * INTENSITY_TICKS))
            self.btn_wireframe.setChecked(params.wireframe)
        finally:
            for w in (self.slider_quality, self.slider_intensity, self.btn_wireframe):
                w.blockSignals(False)

        self.lbl_quality.setText(f"{params.quality}%")
        self.lbl_intensity.setText(f"{params.intensity:.1f}x")
        self.btn_wireframe.setText("WIREFRAME ENABLED" if params.wireframe else "SOLID RENDER")

    def set_busy(self, busy: bool) -> None:
        # Wireframe and export stay available during a synthesis
        self.btn_image.setEnabled(not busy)
        self.slider_quality.setEnabled(not busy)
        self.slider_intensity.setEnabled(not busy)
