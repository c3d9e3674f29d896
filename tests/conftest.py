"""共通フィクスチャ。

- 乱数シード固定
- 小さな描画面/点群/アニメーションループ
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.core.animation import AnimationLoop
from engine.core.state import Constants
from engine.render.grid import GridRenderer
from engine.render.surface import PaintSurface


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def small_constants() -> Constants:
    return Constants(count=20, point_width=2.0, point_height=2.0)


@pytest.fixture()
def surface() -> PaintSurface:
    return PaintSurface(200, 100)


@pytest.fixture()
def loop(small_constants: Constants, surface: PaintSurface) -> AnimationLoop:
    return AnimationLoop(small_constants, GridRenderer(surface, small_constants), seed=7)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "NGR_GRID_COUNT",
        "NGR_SEED",
        "NGR_LOG_LEVEL",
        "NGR_CONTROLS_ENABLED",
        "NGR_HUD_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
