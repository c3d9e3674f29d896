"""
どこで: `api.sketch_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS/キャンバス寸法/背景色/描画定数の解決と、正射影行列の構築を提供。
なぜ: `api.sketch` を薄く保ち、設定解決の優先順位をテスト可能にするため。

優先順位（共通）: 引数の明示指定 > 環境変数（`NGR_*`） > YAML 設定 > 既定値。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from engine.core.state import Constants
from util.color import RGBA, normalize_color
from util.utils import config_section

DEFAULT_CANVAS_SIZE: tuple[int, int] = (1280, 800)
DEFAULT_BACKGROUND: RGBA = (1.0, 1.0, 1.0, 1.0)

logger = logging.getLogger(__name__)


def resolve_fps(requested_fps: int | None, cfg: Mapping[str, Any], *, default: int = 60) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない値は ValueError）。
    - それ以外は `canvas_controller.fps`、無ければ既定値。
    """
    if requested_fps is not None:
        return max(1, int(requested_fps))
    ccfg = config_section(dict(cfg), "canvas_controller")
    try:
        return max(1, int(ccfg.get("fps", default)))
    except (TypeError, ValueError):
        return max(1, int(default))


def resolve_canvas_size(
    canvas_size: tuple[int, int] | None,
    cfg: Mapping[str, Any],
    *,
    screen_size: tuple[int, int] | None = None,
) -> tuple[int, int]:
    """描画面の寸法 [px] を解決する（いずれも正であること）。

    優先順位: 明示指定 > `canvas.width/height` > 起動時の画面サイズ > 既定値。
    設定は幅/高さを個別に上書きできる（片方だけの指定も可）。
    """
    if canvas_size is None:
        canvas = config_section(dict(cfg), "canvas")
        base = screen_size if screen_size is not None else DEFAULT_CANVAS_SIZE
        canvas_size = (
            canvas.get("width", base[0]),
            canvas.get("height", base[1]),
        )
    try:
        w, h = int(canvas_size[0]), int(canvas_size[1])
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"invalid canvas_size: {canvas_size!r}") from e
    if w <= 0 or h <= 0:
        raise ValueError(f"canvas_size must be positive, got: {(w, h)}")
    return w, h


def query_screen_size() -> tuple[int, int] | None:
    """既定スクリーンの寸法 [px] を返す（取得できなければ None）。

    pyglet 2.1 以降は `pyglet.display`、それ以前は `pyglet.canvas` がディスプレイを提供する。
    """
    try:
        import pyglet

        display_mod = getattr(pyglet, "display", None) or pyglet.canvas
        screen = display_mod.get_display().get_default_screen()
        return int(screen.width), int(screen.height)
    except Exception as e:  # 表示不可環境など
        logger.warning("screen size unavailable; using %dx%d: %s", *DEFAULT_CANVAS_SIZE, e)
        return None


def resolve_background(background: Any, cfg: Mapping[str, Any]) -> RGBA:
    """背景色（描画面の透明部分から見える色）を RGBA(0–1) で返す。"""
    if background is None:
        background = config_section(dict(cfg), "canvas").get("background_color", DEFAULT_BACKGROUND)
    return normalize_color(background)


def resolve_constants(
    constants: Constants | None, cfg: Mapping[str, Any], *, count_override: int | None = None
) -> Constants:
    """描画定数を解決する。`count_override`（環境変数）は YAML の `grid.count` より優先。"""
    if constants is None:
        grid = dict(config_section(dict(cfg), "grid"))
        if count_override is not None:
            grid["count"] = count_override
        return Constants.from_mapping(grid)
    return constants.validate()


def build_projection(canvas_width: float, canvas_height: float) -> "np.ndarray":
    """キャンバス px（左上原点・y 下向き）を基準とする正射影行列（ModernGL 用の転置済み）を返す。"""
    proj = np.array(
        [
            [2 / canvas_width, 0, 0, -1],
            [0, -2 / canvas_height, 0, 1],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return proj


__all__ = [
    "resolve_fps",
    "resolve_canvas_size",
    "query_screen_size",
    "resolve_background",
    "resolve_constants",
    "build_projection",
]
