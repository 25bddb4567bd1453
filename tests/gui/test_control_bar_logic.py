"""Control bar reflects engine state and emits its signals."""

import pytest

from gdviz.core.engine import EngineState
from gdviz.gui.control_bar import ControlBar


@pytest.fixture
def bar(qtbot, qapp):
    b = ControlBar()
    qtbot.addWidget(b)
    yield b
    b.close()
    b.deleteLater()
    qapp.processEvents()


def test_initial_state(bar):
    assert bar._action_btn.text() == "Start"
    assert bar.status == ""
    assert bar.learning_rate == pytest.approx(0.01)


def test_state_transitions_update_button_and_status(bar):
    bar.set_state(EngineState.RUNNING)
    assert bar._action_btn.text() == "Pause"
    assert bar.status == "Running…"

    bar.set_state(EngineState.PAUSED)
    assert bar._action_btn.text() == "Start"
    assert bar.status == "Paused"

    bar.set_state(EngineState.IDLE)
    assert bar._action_btn.text() == "Start"
    assert bar.status == ""


def test_learning_rate_clamped_to_spin_range(bar):
    bar.set_learning_rate(7.0)
    assert bar.learning_rate == 1.0

    bar.set_learning_rate(0.0)
    assert bar.learning_rate == pytest.approx(1e-4)

    bar.set_learning_rate("junk")
    assert bar.learning_rate == pytest.approx(0.01)


def test_action_emits_state_label(bar, qtbot):
    with qtbot.waitSignal(bar.action_clicked_with_state) as blocker:
        bar._action_btn.click()
    assert blocker.args == ["Start"]

    bar.set_state(EngineState.RUNNING)
    with qtbot.waitSignal(bar.action_clicked_with_state) as blocker:
        bar._action_btn.click()
    assert blocker.args == ["Pause"]


def test_reset_and_rate_signals(bar, qtbot):
    with qtbot.waitSignal(bar.reset_clicked):
        bar._reset_btn.click()

    with qtbot.waitSignal(bar.learning_rate_changed) as blocker:
        bar.set_learning_rate(0.25)
    assert blocker.args[0] == pytest.approx(0.25)
