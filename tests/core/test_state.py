from __future__ import annotations

import logging

import pytest

from engine.core.state import COUNT_WARN_THRESHOLD, Constants, ControlEvent, ControlState


def test_fade_in_reaches_one_after_100_frames() -> None:
    ctl = ControlState()
    for _ in range(100):
        ctl.fade_in(0.01)
    assert ctl.alpha == 1.0
    ctl.fade_in(0.01)
    assert ctl.alpha == 1.0


def test_pause_toggles_between_zero_and_step() -> None:
    ctl = ControlState()
    ctl.toggle_pause(0.5)
    assert ctl.alteration == 0.5
    ctl.toggle_pause(0.5)
    assert ctl.alteration == 0.0
    assert ctl.paused


def test_pause_from_negative_resumes_positive() -> None:
    ctl = ControlState(alteration=-0.5)
    ctl.toggle_pause(0.5)
    assert ctl.alteration == 0.0
    ctl.toggle_pause(0.5)
    assert ctl.alteration == 0.5


def test_reverse_flips_sign() -> None:
    ctl = ControlState(alteration=0.5)
    ctl.reverse()
    assert ctl.alteration == -0.5
    ctl.reverse()
    assert ctl.alteration == 0.5


def test_restart_reset_keeps_alpha() -> None:
    ctl = ControlState(alpha=0.4, alteration=5.0, carnage=True)
    ctl.reset_for_restart()
    assert (ctl.alpha, ctl.alteration, ctl.carnage) == (0.4, 0.0, False)


def test_control_event_from_name() -> None:
    assert ControlEvent("carnage") is ControlEvent.CARNAGE
    with pytest.raises(ValueError):
        ControlEvent("explode")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"count": 0},
        {"point_width": 0.0},
        {"point_height": -1.0},
        {"blur": 1.5},
        {"margin_ratio": -0.1},
        {"keep_probability": 2.0},
        {"alteration_divisor": 0.0},
    ],
)
def test_constants_validate_rejects_out_of_range(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Constants(**kwargs).validate()


def test_constants_from_mapping_coerces_and_ignores_unknown() -> None:
    c = Constants.from_mapping({"count": "30", "blur": 0.2, "shape": "circle"})
    assert c.count == 30 and isinstance(c.count, int)
    assert c.blur == 0.2
    assert Constants.from_mapping(None) == Constants()
    with pytest.raises(ValueError):
        Constants.from_mapping({"blur": "thick"})


def test_large_count_only_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="engine.core.state"):
        Constants(count=COUNT_WARN_THRESHOLD + 1).validate()
    assert any("rendering may stall" in r.getMessage() for r in caplog.records)


def test_point_size_is_split_into_width_and_height() -> None:
    c = Constants(count=24, point_width=3.0, point_height=3.0).validate()
    assert (c.point_width, c.point_height) == (3.0, 3.0)
    with pytest.raises(TypeError):
        Constants(point_size=3.0)  # type: ignore[call-arg]
