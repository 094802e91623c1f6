"""
Synthesis State Machine
=======================
Plays the scripted "processing" narrative that precedes the adoption of a new
image, and swaps the active image when the script has finished.

    IDLE --start(image)--> RUNNING --tick x7--> RUNNING --tick--> COMPLETED --> IDLE

Every tick runs on the GUI thread (QTimer), so no two ticks of a run can
overlap and the log always grows in script order. The active image is written
exactly once, on the tick after the last stage label.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from PySide6.QtCore import QObject, QTimer, Signal

from hologen.config import STAGE_INTERVAL_MS
from hologen.model.state import SessionState, SynthesisRun, SynthesisStatus

if TYPE_CHECKING:
    from hologen.model.image import ImageHandle

logger = logging.getLogger(__name__)


class SynthesisController(QObject):
    stage_emitted = Signal(int, str)  # (stage index, label)
    status_changed = Signal(object)  # SynthesisStatus
    completed = Signal(object)  # adopted ImageHandle

    def __init__(
        self,
        state: SessionState,
        interval_ms: int = STAGE_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.state = state

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_ticking(self) -> bool:
        return self._timer.isActive()

    def start(self, image: ImageHandle) -> bool:
        """
        Begins a run that will adopt `image`. Ignored while another run is in
        flight (the running one is neither interrupted nor queued behind).
        """
        if self.state.is_running:
            logger.debug("Synthesis already running, ignoring new image.")
            return False

        self.state.run = SynthesisRun(pending_image=image)
        logger.info(f"Synthesis started for '{image.name}'.")
        self.status_changed.emit(SynthesisStatus.RUNNING)
        self._timer.start()
        return True

    def tick(self) -> None:
        """One scheduler step: emit the next stage, or finish the run."""
        run = self.state.run
        if run is None or run.status is not SynthesisStatus.RUNNING:
            self._timer.stop()
            return

        if not run.is_exhausted:
            label = run.emit_next()
            logger.debug(f"Stage {run.emitted_count}/{len(run.stages)}: {label}")
            self.stage_emitted.emit(run.emitted_count - 1, label)
            return

        self._complete(run)

    def cancel(self) -> None:
        """Stops the remaining ticks and discards the run (session end)."""
        self._timer.stop()
        run = self.state.run
        if run is None:
            return
        self.state.run = None
        if run.status is SynthesisStatus.RUNNING:
            logger.info(f"Synthesis cancelled after {run.emitted_count} stage(s).")
            self.status_changed.emit(SynthesisStatus.IDLE)

    def _complete(self, run: SynthesisRun) -> None:
        self._timer.stop()

        image = run.pending_image
        run.pending_image = None
        run.status = SynthesisStatus.COMPLETED
        self.state.parameters = self.state.parameters.with_image(image)
        logger.info("Synthesis completed, new image is active.")

        self.status_changed.emit(SynthesisStatus.COMPLETED)
        self.completed.emit(image)

        # Completed falls straight through to Idle, ready for the next image
        self.state.run = None
        self.status_changed.emit(SynthesisStatus.IDLE)
