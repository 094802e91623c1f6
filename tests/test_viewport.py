import logging
from types import SimpleNamespace
from unittest import mock

from hologen.model.geometry import select_geometry
from hologen.model.parameters import ParameterState
from hologen.view.widgets.viewport import SculptureViewport


def offscreen_viewport(mesher):
    """Just the state the sculpture layer update touches; no render window."""
    return SimpleNamespace(
        _mesher=mesher,
        _sculpture_signature=None,
        _sculpture_actor=None,
        plotter=mock.Mock(),
        _add_sculpture=mock.Mock(),
    )


def test_mesh_failure_is_logged_once_per_descriptor(caplog):
    mesher = mock.Mock()
    mesher.generate_mesh.side_effect = RuntimeError("boom")
    viewport = offscreen_viewport(mesher)
    descriptor = select_geometry(ParameterState())

    with caplog.at_level(logging.ERROR, logger="hologen"):
        for _ in range(60):
            SculptureViewport._update_sculpture_layer(viewport, descriptor)

    assert mesher.generate_mesh.call_count == 1
    assert [r.message for r in caplog.records] == ["Failed to generate sculpture mesh"]
    viewport._add_sculpture.assert_not_called()


def test_new_descriptor_retries_after_failure():
    mesher = mock.Mock()
    mesher.generate_mesh.side_effect = [RuntimeError("boom"), mock.sentinel.mesh]
    viewport = offscreen_viewport(mesher)

    SculptureViewport._update_sculpture_layer(viewport, select_geometry(ParameterState()))
    SculptureViewport._update_sculpture_layer(viewport, select_geometry(ParameterState(quality=10)))

    assert mesher.generate_mesh.call_count == 2
    viewport._add_sculpture.assert_called_once()
    assert viewport._sculpture_actor is viewport._add_sculpture.return_value
