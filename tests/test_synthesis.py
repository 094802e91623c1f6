import time

import numpy as np
import pytest

from hologen.config import STAGE_INTERVAL_MS
from hologen.controller.synthesis import SynthesisController
from hologen.model.state import SYNTHESIS_STAGES, SessionState, SynthesisRun, SynthesisStatus

from conftest import make_handle


@pytest.fixture
def state():
    return SessionState()


@pytest.fixture
def machine(qapp, state):
    controller = SynthesisController(state)
    yield controller
    controller.cancel()


def record(signal):
    events = []
    signal.connect(lambda *args: events.append(args if len(args) > 1 else args[0]))
    return events


def test_script_has_seven_fixed_stages():
    assert len(SYNTHESIS_STAGES) == 7
    assert SYNTHESIS_STAGES[0] == "Initializing Quantum Neural Fabric..."
    assert SYNTHESIS_STAGES[-1] == "Neural Mesh Online."


def test_default_interval(machine):
    assert machine.interval_ms == STAGE_INTERVAL_MS == 350


def test_start_enters_running(machine, state, opaque_image):
    statuses = record(machine.status_changed)

    assert machine.start(opaque_image)

    assert state.status is SynthesisStatus.RUNNING
    assert state.run.pending_image is opaque_image
    assert state.run.emitted_count == 0
    assert state.log == []
    assert machine.is_ticking
    assert statuses == [SynthesisStatus.RUNNING]


def test_stages_are_emitted_in_order_before_image_swap(machine, state, opaque_image):
    stages = record(machine.stage_emitted)
    machine.start(opaque_image)

    for i in range(len(SYNTHESIS_STAGES)):
        machine.tick()
        assert state.run.emitted_count == i + 1
        assert state.parameters.active_image is None

    assert stages == list(enumerate(SYNTHESIS_STAGES))
    assert state.log == list(SYNTHESIS_STAGES)
    assert state.status is SynthesisStatus.RUNNING


def test_image_is_adopted_once_after_last_stage(machine, state, opaque_image):
    adopted = record(machine.completed)
    statuses = record(machine.status_changed)
    machine.start(opaque_image)

    for _ in SYNTHESIS_STAGES:
        machine.tick()
    machine.tick()

    assert adopted == [opaque_image]
    assert state.parameters.active_image is opaque_image
    assert statuses == [SynthesisStatus.RUNNING, SynthesisStatus.COMPLETED, SynthesisStatus.IDLE]
    assert not machine.is_ticking

    # Back to Idle: count and log reset
    assert state.run is None
    assert state.status is SynthesisStatus.IDLE
    assert state.log == []

    # Late ticks do nothing
    machine.tick()
    assert adopted == [opaque_image]


def test_second_image_while_running_is_ignored(machine, state, opaque_image):
    machine.start(opaque_image)
    machine.tick()
    machine.tick()

    assert not machine.start(make_handle(name="second.png"))

    assert state.run.pending_image is opaque_image
    assert state.run.emitted_count == 2


def test_cancel_discards_run(machine, state, opaque_image):
    statuses = record(machine.status_changed)
    machine.start(opaque_image)
    machine.tick()

    machine.cancel()
    machine.tick()

    assert not machine.is_ticking
    assert state.run is None
    assert state.parameters.active_image is None
    assert statuses == [SynthesisStatus.RUNNING, SynthesisStatus.IDLE]


def test_next_run_starts_fresh(machine, state, opaque_image):
    machine.start(opaque_image)
    for _ in range(len(SYNTHESIS_STAGES) + 1):
        machine.tick()

    second = make_handle(name="second.png")
    assert machine.start(second)
    assert state.run.emitted_count == 0
    assert state.run.pending_image is second
    # The previous image stays on screen until the new run completes
    assert state.parameters.active_image is opaque_image


def test_run_refuses_to_emit_past_the_script():
    run = SynthesisRun(pending_image=None)
    for _ in SYNTHESIS_STAGES:
        run.emit_next()
    assert run.is_exhausted
    with pytest.raises(RuntimeError):
        run.emit_next()


def test_stages_arrive_at_the_real_interval(qtbot, state, opaque_image):
    controller = SynthesisController(state)
    stamps = []
    controller.stage_emitted.connect(lambda i, label: stamps.append(time.perf_counter()))

    started = time.perf_counter()
    with qtbot.waitSignal(controller.completed, timeout=10_000):
        controller.start(opaque_image)
    finished = time.perf_counter()

    assert len(stamps) == len(SYNTHESIS_STAGES)
    gaps = np.diff([started, *stamps, finished])
    # Seven stage ticks plus the completing tick, each one interval apart
    assert len(gaps) == 8
    assert gaps.min() > 0.3
    assert gaps.max() < 1.5
