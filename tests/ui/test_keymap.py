from __future__ import annotations

import pytest

from engine.core.state import ControlEvent
from engine.ui.controls.keymap import DEFAULT_KEYMAP, event_for_key


@pytest.mark.parametrize(
    "name, expected",
    [
        ("UP", ControlEvent.INCREASE),
        ("DOWN", ControlEvent.DECREASE),
        ("r", ControlEvent.REVERSE),
        ("SPACE", ControlEvent.PAUSE),
        ("C", ControlEvent.CARNAGE),
        ("BACKSPACE", ControlEvent.RESTART),
    ],
)
def test_default_bindings(name: str, expected: ControlEvent) -> None:
    assert event_for_key(name) is expected


def test_unbound_key_returns_none() -> None:
    assert event_for_key("F12") is None


def test_every_event_has_a_key() -> None:
    assert set(DEFAULT_KEYMAP.values()) == set(ControlEvent)
