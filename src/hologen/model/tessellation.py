"""Tessellation policy: mesh resolution as a function of the quality slider."""
import math

SEGMENTS_PER_QUALITY: float = 2.24
BASE_SEGMENTS: int = 64


def segments(quality: int) -> int:
    """
    Number of mesh segments for a quality value in [1, 100].

    Ranges from 66 (quality=1) to 288 (quality=100). The caller is expected
    to clamp the quality first.
    """
    return math.floor(quality * SEGMENTS_PER_QUALITY) + BASE_SEGMENTS


def radial_segments(tubular_segments: int) -> int:
    """Tube cross-section resolution of the demo knot."""
    return tubular_segments // 4
