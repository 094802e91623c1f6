import pytest

from hologen.view.widgets.control_panel import ControlPanel


@pytest.fixture
def panel(qtbot, session):
    widget = ControlPanel(session)
    qtbot.addWidget(widget)
    return widget


def test_panel_shows_session_defaults(panel):
    assert panel.slider_quality.value() == 80
    assert panel.slider_intensity.value() == 12
    assert panel.lbl_quality.text() == "80%"
    assert panel.lbl_intensity.text() == "1.2x"
    assert panel.btn_wireframe.text() == "SOLID RENDER"
    assert not panel.btn_wireframe.isChecked()


def test_sliders_edit_the_session(panel, session):
    panel.slider_quality.setValue(42)
    panel.slider_intensity.setValue(25)

    assert session.parameters.quality == 42
    assert session.parameters.intensity == pytest.approx(2.5)
    assert panel.lbl_quality.text() == "42%"
    assert panel.lbl_intensity.text() == "2.5x"


def test_wireframe_button_toggles_label(panel, session):
    panel.btn_wireframe.click()

    assert session.parameters.wireframe
    assert panel.btn_wireframe.text() == "WIREFRAME ENABLED"


def test_external_edit_updates_widgets(panel, session):
    session.set_quality(5)
    assert panel.slider_quality.value() == 5
    assert panel.lbl_quality.text() == "5%"


def test_busy_disables_inputs_but_not_style_or_export(panel, session, image_submission):
    assert session.submit_image(image_submission)

    assert not panel.btn_image.isEnabled()
    assert not panel.slider_quality.isEnabled()
    assert not panel.slider_intensity.isEnabled()
    assert panel.btn_wireframe.isEnabled()
    assert panel.btn_export.isEnabled()


def test_buttons_forward_requests(qtbot, panel):
    with qtbot.waitSignal(panel.image_requested, timeout=1000):
        panel.btn_image.click()
    with qtbot.waitSignal(panel.export_requested, timeout=1000):
        panel.btn_export.click()
