from __future__ import annotations

import sys
from types import SimpleNamespace

import pytest

from api.sketch_runner.utils import (
    DEFAULT_BACKGROUND,
    DEFAULT_CANVAS_SIZE,
    query_screen_size,
    resolve_background,
    resolve_canvas_size,
    resolve_constants,
    resolve_fps,
)
from engine.core.state import Constants


def test_resolve_fps_priority() -> None:
    cfg = {"canvas_controller": {"fps": 30}}
    assert resolve_fps(24, cfg) == 24
    assert resolve_fps(None, cfg) == 30
    assert resolve_fps(None, {}) == 60
    assert resolve_fps(0, cfg) == 1
    assert resolve_fps(None, {"canvas_controller": {"fps": "fast"}}) == 60


def test_resolve_canvas_size() -> None:
    assert resolve_canvas_size((320, 240), {}) == (320, 240)
    assert resolve_canvas_size(None, {"canvas": {"width": 640, "height": 480}}) == (640, 480)
    assert resolve_canvas_size(None, {}) == DEFAULT_CANVAS_SIZE
    with pytest.raises(ValueError):
        resolve_canvas_size((0, 10), {})


def test_resolve_background() -> None:
    assert resolve_background(None, {}) == DEFAULT_BACKGROUND
    assert resolve_background("#000000", {}) == (0.0, 0.0, 0.0, 1.0)
    assert resolve_background(None, {"canvas": {"background_color": [0, 0, 0, 255]}}) == (
        0.0,
        0.0,
        0.0,
        1.0,
    )


def test_resolve_constants_override_beats_yaml() -> None:
    cfg = {"grid": {"count": 10, "blur": 0.3}}
    c = resolve_constants(None, cfg, count_override=42)
    assert (c.count, c.blur) == (42, 0.3)
    explicit = Constants(count=5)
    assert resolve_constants(explicit, cfg, count_override=42) is explicit
    with pytest.raises(ValueError):
        resolve_constants(Constants(count=0), cfg)


def test_resolve_canvas_size_follows_screen_unless_configured() -> None:
    screen = (1920, 1080)
    assert resolve_canvas_size(None, {}, screen_size=screen) == screen
    assert resolve_canvas_size(None, {"canvas": {"width": 800}}, screen_size=screen) == (800, 1080)
    assert resolve_canvas_size((320, 240), {}, screen_size=screen) == (320, 240)


def _fake_pyglet(get_display) -> SimpleNamespace:
    return SimpleNamespace(display=SimpleNamespace(get_display=get_display))


def test_query_screen_size_reads_default_screen(monkeypatch: pytest.MonkeyPatch) -> None:
    screen = SimpleNamespace(width=2560, height=1440)
    display = SimpleNamespace(get_default_screen=lambda: screen)
    monkeypatch.setitem(sys.modules, "pyglet", _fake_pyglet(lambda: display))
    assert query_screen_size() == (2560, 1440)


def test_query_screen_size_without_display_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_display():
        raise RuntimeError("no display")

    monkeypatch.setitem(sys.modules, "pyglet", _fake_pyglet(_no_display))
    assert query_screen_size() is None
