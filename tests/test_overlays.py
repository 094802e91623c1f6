from hologen.model.state import SYNTHESIS_STAGES
from hologen.view.widgets.overlays import ProcessingOverlay


def test_stage_lines_show_progress_percent():
    assert ProcessingOverlay.format_line(0, SYNTHESIS_STAGES[0]) == (
        "10%   > Initializing Quantum Neural Fabric..."
    )
    assert ProcessingOverlay.format_line(6, SYNTHESIS_STAGES[6]) == "70%   > Neural Mesh Online."


def test_overlay_collects_and_clears_lines(qtbot):
    overlay = ProcessingOverlay()
    qtbot.addWidget(overlay)

    for i, label in enumerate(SYNTHESIS_STAGES[:3]):
        overlay.append_stage(i, label)
    assert overlay.lines() == [ProcessingOverlay.format_line(i, s) for i, s in enumerate(SYNTHESIS_STAGES[:3])]
    # Cursor stays last
    assert overlay.log_layout.itemAt(overlay.log_layout.count() - 1).widget() is overlay.lbl_cursor

    overlay.clear()
    assert overlay.lines() == []
