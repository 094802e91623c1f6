"""
Sculpture Parameters (Data Model)
=================================
The user-controlled knobs of the digital sculpture.

Every edit produces a new, fully-validated ParameterState. Values outside
their domain are clamped rather than rejected so that the renderer always
draws exactly what the controls show.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, TYPE_CHECKING

from hologen.config import (
    QUALITY_MIN, QUALITY_MAX, INTENSITY_MIN, INTENSITY_MAX, INTENSITY_STEP,
    DEFAULT_QUALITY, DEFAULT_INTENSITY,
)

if TYPE_CHECKING:
    from hologen.model.image import ImageHandle

logger = logging.getLogger(__name__)


def _as_number(value: object) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def clamp_quality(value: object) -> Optional[int]:
    """
    Coerces a slider value into the quality domain [1, 100].

    Fractions are floored (the slider label shows the floored value).
    Returns None for input that is not a number at all.
    """
    number = _as_number(value)
    if number is None:
        return None
    number = min(max(number, QUALITY_MIN), QUALITY_MAX)
    return int(math.floor(number))


def clamp_intensity(value: object) -> Optional[float]:
    """
    Coerces a value into [0.0, 3.0] snapped to the 0.1 slider step.

    Returns None for input that is not a number at all.
    """
    number = _as_number(value)
    if number is None:
        return None
    number = min(max(number, INTENSITY_MIN), INTENSITY_MAX)
    steps = round(number / INTENSITY_STEP)
    return round(steps * INTENSITY_STEP, 1)


@dataclass(frozen=True)
class ParameterState:
    quality: int = DEFAULT_QUALITY
    intensity: float = DEFAULT_INTENSITY
    wireframe: bool = False
    active_image: Optional[ImageHandle] = None

    @property
    def has_image(self) -> bool:
        return self.active_image is not None

    def with_quality(self, value: object) -> ParameterState:
        quality = clamp_quality(value)
        if quality is None:
            logger.warning(f"Ignoring non-numeric quality: {value!r}")
            return self
        return replace(self, quality=quality)

    def with_intensity(self, value: object) -> ParameterState:
        intensity = clamp_intensity(value)
        if intensity is None:
            logger.warning(f"Ignoring non-numeric intensity: {value!r}")
            return self
        return replace(self, intensity=intensity)

    def with_wireframe(self, enabled: bool) -> ParameterState:
        return replace(self, wireframe=bool(enabled))

    def with_image(self, image: Optional[ImageHandle]) -> ParameterState:
        return replace(self, active_image=image)
