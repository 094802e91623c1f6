"""
Session Controller
==================
The explicit context object shared by the window, the control panel and the
viewport for the lifetime of one session.

Why is this file needed?
------------------------
1. Gatekeeping: All writes to the SessionState go through here, so parameter
   edits and image submissions can be locked while an image is being decoded
   or synthesized.
2. Signals: Views subscribe to parameter, geometry and progress changes
   instead of polling the state.
3. Lifecycle: close() stops any pending synthesis tick so nothing can mutate
   the state after the session has ended.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from hologen.config import STAGE_INTERVAL_MS
from hologen.controller.synthesis import SynthesisController
from hologen.controller.workers import ImageDecodeWorker
from hologen.model.geometry import GeometryDescriptor, select_geometry
from hologen.model.image import ImageHandle, ImageSubmission
from hologen.model.parameters import ParameterState
from hologen.model.state import SessionState, SynthesisStatus

logger = logging.getLogger(__name__)


class Session(QObject):
    parameters_changed = Signal(object)  # ParameterState
    geometry_changed = Signal(object)  # GeometryDescriptor
    busy_changed = Signal(bool)
    decode_failed = Signal(str)

    # Re-exported from the synthesis state machine
    stage_emitted = Signal(int, str)
    status_changed = Signal(object)

    def __init__(
        self,
        state: Optional[SessionState] = None,
        stage_interval_ms: int = STAGE_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.state = state if state is not None else SessionState()
        self._decode_worker: Optional[ImageDecodeWorker] = None
        self._closed = False

        self.synthesis = SynthesisController(self.state, interval_ms=stage_interval_ms, parent=self)
        self.synthesis.stage_emitted.connect(self.stage_emitted)
        self.synthesis.status_changed.connect(self.status_changed)
        self.synthesis.completed.connect(self._on_synthesis_completed)

    # ------------------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------------------

    @property
    def parameters(self) -> ParameterState:
        return self.state.parameters

    @property
    def status(self) -> SynthesisStatus:
        return self.state.status

    @property
    def log(self) -> list[str]:
        """Stage labels emitted so far by the current run."""
        return self.state.log

    @property
    def is_busy(self) -> bool:
        return self.state.is_busy

    def geometry(self) -> GeometryDescriptor:
        """Descriptor for the current parameters. Cheap; call it every frame."""
        return select_geometry(self.state.parameters)

    # ------------------------------------------------------------------------------
    # Parameter edits
    # ------------------------------------------------------------------------------

    def set_quality(self, value: object) -> bool:
        if self.state.is_busy:
            logger.debug(f"Quality edit ignored while busy: {value!r}")
            return False
        self._replace_parameters(self.state.parameters.with_quality(value))
        return True

    def set_intensity(self, value: object) -> bool:
        if self.state.is_busy:
            logger.debug(f"Intensity edit ignored while busy: {value!r}")
            return False
        self._replace_parameters(self.state.parameters.with_intensity(value))
        return True

    def set_wireframe(self, enabled: bool) -> bool:
        # Render style only; never touches a running synthesis
        self._replace_parameters(self.state.parameters.with_wireframe(enabled))
        return True

    def _replace_parameters(self, parameters: ParameterState) -> None:
        if parameters == self.state.parameters:
            return
        self.state.parameters = parameters
        self.parameters_changed.emit(parameters)
        self.geometry_changed.emit(self.geometry())

    # ------------------------------------------------------------------------------
    # Image submission
    # ------------------------------------------------------------------------------

    def submit_image(self, submission: ImageSubmission) -> bool:
        """
        Starts adopting a new image: decode in the background, then run the
        synthesis script. Returns False (and changes nothing) if the
        submission is not an image or the session is busy.
        """
        if self._closed:
            return False
        if self.state.is_busy:
            logger.debug(f"Submission '{submission.name}' ignored while busy.")
            return False
        if not submission.is_image:
            logger.info(f"Rejected '{submission.name}': '{submission.mime_type}' is not an image type.")
            return False

        self.state.decoding = True
        self.busy_changed.emit(True)

        worker = ImageDecodeWorker(submission, parent=self)
        worker.decoded.connect(self._on_decoded)
        worker.error_occurred.connect(self._on_decode_error)
        # The thread holds the raw file bytes; free it once it has finished
        worker.finished.connect(worker.deleteLater)
        self._decode_worker = worker
        worker.start()
        return True

    def submit_path(self, path: str) -> bool:
        """Convenience wrapper for file dialogs, drops and the command line."""
        try:
            submission = ImageSubmission.from_path(path)
        except OSError as e:
            logger.warning(f"Cannot read '{path}': {e}")
            self.decode_failed.emit(str(e))
            return False
        return self.submit_image(submission)

    def _on_decoded(self, image: ImageHandle) -> None:
        self.state.decoding = False
        self._decode_worker = None
        if self._closed:
            return
        if not self.synthesis.start(image):
            self.busy_changed.emit(self.state.is_busy)

    def _on_decode_error(self, message: str) -> None:
        self.state.decoding = False
        self._decode_worker = None
        if self._closed:
            return
        self.busy_changed.emit(False)
        self.decode_failed.emit(message)

    def _on_synthesis_completed(self, image: ImageHandle) -> None:
        self.parameters_changed.emit(self.state.parameters)
        self.geometry_changed.emit(self.geometry())
        self.busy_changed.emit(False)

    # ------------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------------

    def close(self) -> None:
        """Ends the session: no tick or decode result may land after this."""
        if self._closed:
            return
        self._closed = True
        self.synthesis.cancel()
        if self._decode_worker is not None and self._decode_worker.isRunning():
            # Decoding cannot be interrupted; wait so the thread is not destroyed mid-run
            self._decode_worker.wait()
        self.state.decoding = False
        logger.info("Session closed.")
