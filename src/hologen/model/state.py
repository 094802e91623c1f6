"""
Session State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the current parameters and the in-flight
   synthesis run in one place. One instance lives from session start to
   session end and is passed to whoever needs it (no module globals).
2. Decoupling: Views read from this object; Controllers write to this object.

Classes:
    SynthesisStatus: Lifecycle of a synthesis run.
    SynthesisRun: One scripted "processing" sequence for a submitted image.
    SessionState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Optional, TYPE_CHECKING

from hologen.model.parameters import ParameterState

if TYPE_CHECKING:
    from hologen.model.image import ImageHandle

logger = logging.getLogger(__name__)

# Scripted narrative shown while a new image is adopted. It is not tied to
# the actual decode work.
SYNTHESIS_STAGES: tuple[str, ...] = (
    "Initializing Quantum Neural Fabric...",
    "Scanning Grayscale Luminance Map...",
    "Triangulating Dense Vertex Mesh...",
    "Reducing Surface Entropy...",
    "Injecting PBR Micro-Shaders...",
    "Stabilizing Displacement Buffer...",
    "Neural Mesh Online.",
)


class SynthesisStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class SynthesisRun:
    pending_image: Optional[ImageHandle]
    stages: tuple[str, ...] = SYNTHESIS_STAGES
    emitted_count: int = 0
    log: list[str] = field(default_factory=list)
    status: SynthesisStatus = SynthesisStatus.RUNNING

    @property
    def is_exhausted(self) -> bool:
        return self.emitted_count >= len(self.stages)

    def emit_next(self) -> str:
        """Appends the next stage label to the log and returns it."""
        if self.is_exhausted:
            raise RuntimeError("All stages have already been emitted.")
        label = self.stages[self.emitted_count]
        self.log.append(label)
        self.emitted_count += 1
        return label


@dataclass
class SessionState:
    """
    Holds the parameters and the synthesis run of the open session.
    Pass this instance to your Controllers and Views.
    """
    parameters: ParameterState = field(default_factory=ParameterState)
    run: Optional[SynthesisRun] = None
    decoding: bool = False

    @property
    def status(self) -> SynthesisStatus:
        return self.run.status if self.run is not None else SynthesisStatus.IDLE

    @property
    def is_running(self) -> bool:
        return self.status is SynthesisStatus.RUNNING

    @property
    def is_busy(self) -> bool:
        """True while edits and new submissions are locked."""
        return self.decoding or self.is_running

    @property
    def log(self) -> list[str]:
        return list(self.run.log) if self.run is not None else []

    def reset(self) -> None:
        """Back to session-start defaults."""
        self.parameters = ParameterState()
        self.run = None
        self.decoding = False
        logger.info("Session state has been reset.")
