import math

from hologen.model.tessellation import segments, radial_segments


def test_segment_range_endpoints():
    assert segments(1) == 66
    assert segments(100) == 288


def test_default_quality_segments():
    assert segments(80) == math.floor(80 * 2.24) + 64 == 243


def test_segments_never_decrease():
    values = [segments(q) for q in range(1, 101)]
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_radial_segments_is_a_quarter():
    assert radial_segments(243) == 60
    assert radial_segments(66) == 16
