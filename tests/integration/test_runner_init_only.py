from __future__ import annotations

import pytest

from engine.core.state import Constants


@pytest.mark.io
# run_sketch(init_only=True) returns before creating the window or GL context.
def test_run_sketch_init_only_headless(clean_env: None) -> None:
    """`init_only=True` ならウィンドウ/GL 作成前に構築済みのループを返す。"""
    from api import run

    loop = run(canvas_size=(100, 80), constants=Constants(count=10), fps=1, seed=3, init_only=True)
    assert loop.renderer.surface.width == 100
    assert loop.renderer.surface.height == 80
    assert loop.frame_count == 0
    loop.advance_frame()
    assert loop.frame_count == 1


@pytest.mark.smoke
def test_cli_parser_defaults() -> None:
    from api.__main__ import build_parser

    args = build_parser().parse_args(["--count", "12", "--no-controls"])
    assert args.count == 12
    assert args.no_controls is True
    assert args.seed is None


@pytest.mark.io
def test_run_sketch_accepts_negative_env_seed(monkeypatch: pytest.MonkeyPatch, clean_env: None) -> None:
    from api import run
    from common import settings

    monkeypatch.setenv("NGR_SEED", "-1")
    try:
        settings.reload_from_env()
        loop = run(canvas_size=(50, 50), constants=Constants(count=5), init_only=True)
        assert loop.frame_count == 0
    finally:
        monkeypatch.undo()
        settings.reload_from_env()
