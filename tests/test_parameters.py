import math

import pytest

from hologen.model.parameters import ParameterState, clamp_quality, clamp_intensity


def test_defaults():
    params = ParameterState()
    assert params.quality == 80
    assert params.intensity == 1.2
    assert params.wireframe is False
    assert params.active_image is None
    assert not params.has_image


@pytest.mark.parametrize("value, expected", [
    (0, 1),
    (-50, 1),
    (1, 1),
    (55.9, 55),
    ("42", 42),
    (100, 100),
    (250, 100),
    (math.inf, 100),
])
def test_quality_is_clamped(value, expected):
    assert clamp_quality(value) == expected


@pytest.mark.parametrize("value, expected", [
    (-1.0, 0.0),
    (0.0, 0.0),
    (1.24, 1.2),
    (1.26, 1.3),
    ("2.5", 2.5),
    (3.0, 3.0),
    (7.0, 3.0),
])
def test_intensity_is_clamped_and_snapped(value, expected):
    assert clamp_intensity(value) == expected


@pytest.mark.parametrize("value", [None, "abc", math.nan, object()])
def test_non_numeric_input_is_ignored(value):
    params = ParameterState()
    assert params.with_quality(value) is params
    assert params.with_intensity(value) is params


def test_edits_return_new_state(opaque_image):
    params = ParameterState()
    edited = params.with_quality(10).with_intensity(0.5).with_wireframe(True).with_image(opaque_image)

    assert params == ParameterState()
    assert edited.quality == 10
    assert edited.intensity == 0.5
    assert edited.wireframe is True
    assert edited.active_image is opaque_image


def test_state_is_immutable():
    with pytest.raises(AttributeError):
        ParameterState().quality = 5
