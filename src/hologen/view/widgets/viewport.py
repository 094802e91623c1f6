"""
3D Visualization Widget (PyVista Wrapper) - Continuous Rendering
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import QTimer, QElapsedTimer
from PySide6.QtGui import QCloseEvent

from pyvistaqt import QtInteractor
import pyvista as pv

from hologen.config import FRAME_INTERVAL_MS
from hologen.controller.mesher import SculptureMesher, COLOR_ARRAY
from hologen.controller.session import Session
from hologen.model.geometry import GeometryDescriptor, GeometryKind

logger = logging.getLogger(__name__)

BACKGROUND = "#050505"
FLOOR_Y = -2.0


class SculptureViewport(QWidget):
    """
    Draws the session's current geometry once per display frame.

    The viewport only reads from the session: it asks for a fresh
    GeometryDescriptor every frame, rebuilds the actor when the descriptor's
    mesh or style changed, and applies the time-dependent pose.
    """
    def __init__(self, session: Session, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.session = session

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._mesher = SculptureMesher()

        # --- Actors state ---
        self._sculpture_actor: Optional[pv.Actor] = None
        self._sculpture_signature: Optional[Tuple] = None
        self._floor_actor: Optional[pv.Actor] = None

        self._init_plotter()
        self._init_lights()
        self._init_floor()

        # Animation is a function of elapsed wall-clock time
        self._clock = QElapsedTimer()
        self._clock.start()

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self.render_frame)
        self._frame_timer.start()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def render_frame(self) -> None:
        """Redraw with the current descriptor and pose."""
        descriptor = self.session.geometry()
        self._update_sculpture_layer(descriptor)

        if self._sculpture_actor is not None:
            elapsed = self._clock.elapsed() / 1000.0
            self._sculpture_actor.user_matrix = descriptor.motion.pose(elapsed).matrix()

        self.plotter.render()

    def export_capture(self, filepath: str) -> str:
        """Writes the current frame to a PNG file and returns its path."""
        self.render_frame()
        self.plotter.screenshot(filepath)
        logger.info(f"Capture exported to: {filepath}")
        return filepath

    def shutdown(self) -> None:
        """Stop the frame loop and release the render window."""
        self._frame_timer.stop()
        self.plotter.close()

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _update_sculpture_layer(self, descriptor: GeometryDescriptor) -> None:
        """Rebuild the sculpture actor only if mesh or style changed."""
        signature = (descriptor.mesh_key(), descriptor.wireframe, descriptor.material)
        if signature == self._sculpture_signature:
            return

        try:
            mesh = self._mesher.generate_mesh(descriptor)
        except Exception:
            logger.exception("Failed to generate sculpture mesh")
            # Log once per descriptor, not once per frame
            self._sculpture_signature = signature
            return

        if self._sculpture_actor is not None:
            self.plotter.remove_actor(self._sculpture_actor, render=False)

        self._sculpture_actor = self._add_sculpture(mesh, descriptor)
        self._sculpture_signature = signature

    def _add_sculpture(self, mesh: pv.PolyData, descriptor: GeometryDescriptor) -> pv.Actor:
        material = descriptor.material
        style = "wireframe" if descriptor.wireframe else "surface"

        if descriptor.kind is GeometryKind.DEMO:
            # No emissive term in VTK: the ambient coefficient makes the color glow
            return self.plotter.add_mesh(
                mesh,
                color=material.color,
                style=style,
                opacity=material.opacity,
                ambient=min(material.emissive_intensity, 1.0),
                diffuse=0.6,
                smooth_shading=True,
                line_width=1,
                pickable=False,
                show_scalar_bar=False,
                reset_camera=False,
            )

        return self.plotter.add_mesh(
            mesh,
            scalars=COLOR_ARRAY,
            rgba=True,
            style=style,
            pbr=True,
            metallic=material.metalness,
            roughness=material.roughness,
            culling=None if material.double_sided else "back",
            smooth_shading=mesh.n_cells > 0,
            line_width=1,
            pickable=False,
            show_scalar_bar=False,
            reset_camera=False,
        )

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(BACKGROUND)
        self.plotter.camera_position = [(0.0, 0.0, 8.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
        self.plotter.camera.view_angle = 45.0
        self.plotter.enable_anti_aliasing("ssaa")

    def _init_lights(self) -> None:
        self.plotter.remove_all_lights()

        ambient = pv.Light(light_type="headlight", intensity=0.3)
        spot = pv.Light(
            position=(10.0, 10.0, 10.0),
            focal_point=(0.0, 0.0, 0.0),
            intensity=1.0,
            positional=True,
            cone_angle=30.0,
        )
        magenta = pv.Light(position=(-10.0, 5.0, -10.0), color="#FF003C", intensity=0.8, positional=True)
        cyan = pv.Light(position=(10.0, 5.0, 10.0), color="#00F0FF", intensity=0.8, positional=True)

        for light in (ambient, spot, magenta, cyan):
            self.plotter.add_light(light)

    def _init_floor(self) -> None:
        floor = pv.Plane(
            center=(0.0, FLOOR_Y, 0.0),
            direction=(0.0, 1.0, 0.0),
            i_size=40.0,
            j_size=40.0,
            i_resolution=40,
            j_resolution=40,
        )
        self._floor_actor = self.plotter.add_mesh(
            floor,
            style="wireframe",
            color="#1a1a1a",
            line_width=1,
            lighting=False,
            pickable=False,
            reset_camera=False,
        )

    def closeEvent(self, event: QCloseEvent) -> None:
        self.shutdown()
        super().closeEvent(event)
