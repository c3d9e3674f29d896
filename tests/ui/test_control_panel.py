from __future__ import annotations

from engine.core.animation import AnimationLoop
from engine.core.state import ControlEvent
from engine.ui.controls.panel import ButtonGroup, ControlPanel


def _panel() -> tuple[ControlPanel, list[ControlEvent]]:
    seen: list[ControlEvent] = []
    return ControlPanel(seen.append), seen


def test_initially_only_first_group_visible() -> None:
    panel, _ = _panel()
    assert panel.is_visible(ButtonGroup.FIRST)
    assert not panel.is_visible("second")
    assert panel.buttons(ButtonGroup.FIRST) == [ControlEvent.INCREASE, ControlEvent.DECREASE]
    assert len(panel.buttons(ButtonGroup.SECOND)) == 4


def test_hidden_group_buttons_are_ignored() -> None:
    panel, seen = _panel()
    assert panel.activate(ControlEvent.CARNAGE) is False
    assert seen == []


def test_increase_swaps_groups_and_restart_swaps_back() -> None:
    panel, seen = _panel()
    assert panel.activate("increase") is True
    assert not panel.is_visible(ButtonGroup.FIRST)
    assert panel.is_visible(ButtonGroup.SECOND)
    assert panel.activate(ControlEvent.DECREASE) is False
    panel.activate(ControlEvent.RESTART)
    assert panel.is_visible(ButtonGroup.FIRST)
    assert not panel.is_visible(ButtonGroup.SECOND)
    assert seen == [ControlEvent.INCREASE, ControlEvent.RESTART]


def test_toggle_labels_cycle_and_survive_restart() -> None:
    panel, _ = _panel()
    panel.activate(ControlEvent.DECREASE)
    assert panel.label(ControlEvent.REVERSE) == ">>"
    panel.activate(ControlEvent.REVERSE)
    assert panel.label(ControlEvent.REVERSE) == "<<"
    panel.activate(ControlEvent.PAUSE)
    assert panel.label(ControlEvent.PAUSE) == "|>"
    panel.activate(ControlEvent.RESTART)
    panel.activate(ControlEvent.INCREASE)
    assert panel.label(ControlEvent.REVERSE) == "<<"
    assert panel.label(ControlEvent.PAUSE) == "|>"


def test_listeners_are_notified_after_press() -> None:
    panel, _ = _panel()
    calls: list[bool] = []

    def listener(p: ControlPanel) -> None:
        calls.append(p.is_visible(ButtonGroup.SECOND))

    panel.subscribe(listener)
    panel.activate(ControlEvent.INCREASE)
    panel.unsubscribe(listener)
    panel.unsubscribe(listener)
    panel.activate(ControlEvent.RESTART)
    assert calls == [True]


def test_panel_drives_animation_loop(loop: AnimationLoop) -> None:
    panel = ControlPanel(loop.dispatch)
    panel.activate(ControlEvent.INCREASE)
    panel.activate(ControlEvent.CARNAGE)
    assert loop.control.alteration == 0.5
    assert loop.control.carnage is True
    panel.activate(ControlEvent.RESTART)
    assert loop.control.carnage is False
    assert loop.restart_count == 1
