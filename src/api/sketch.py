"""
どこで: `api.sketch`（実行ランナー）。
何を: 描画面・点群アニメーション・GPU 合成・操作 UI を結線し、pyglet のイベントループで駆動する。
なぜ: 1 関数呼び出しで対話的なアニメーション実行を可能にするため（操作ウィンドウは任意で自動フォールバック）。

主エントリポイント:
- `run_sketch(*, canvas_size=None, fps=None, constants=None, seed=None, ...)`

実行フロー（概要）:
1) 設定解決: YAML（`configs/default.yaml` + ルート `config.yaml`）と `NGR_*` 環境変数から
   描画定数・キャンバス寸法・FPS・背景色を確定する。
2) 状態構築: `PaintSurface` → `GridRenderer` → `AnimationLoop`（点群生成と下塗り）→ `ControlPanel`。
   `init_only=True` ならここで返す（ウィンドウ/GL を作らない）。
3) ウィンドウ/GL: `RenderWindow` を生成し、`ModernGL` で持続 FBO と提示用プログラムを用意。
4) 操作 UI: Dear PyGui の操作ウィンドウ（失敗時は Null）とキー割り当て。
5) フレーム駆動: `FrameClock`（AnimationLoop → SurfaceRenderer → HUD）を `pyglet.clock` で駆動。
   `ESC` またはウィンドウを閉じると、スケジュール解除・操作ウィンドウ終了・GL 解放を行う。

スレッド:
- すべて主スレッド。操作イベントは pyglet/DPG のコールバックとしてフレームの合間に届く。

注意/制限:
- 描画面の寸法は起動時に固定（リサイズ非対応）。既定は起動時の画面サイズ。
- `grid.count` を大きくすると 1 フレームの処理が重くなり、ホストが応答しなくなる場合がある。
"""

from __future__ import annotations

import logging
from typing import Any

from common.logging import setup_default_logging
from common.settings import get as get_settings
from engine.core.animation import AnimationLoop
from engine.core.state import Constants, ControlEvent
from engine.core.tickable import Tickable
from engine.render.grid import GridRenderer
from engine.render.surface import PaintSurface
from engine.ui.controls.keymap import event_for_key
from engine.ui.controls.panel import ControlPanel
from engine.ui.hud.config import HUDConfig
from util.utils import config_section, load_config

from .sketch_runner.utils import (
    query_screen_size,
    resolve_background,
    resolve_canvas_size,
    resolve_constants,
    resolve_fps,
)

logger = logging.getLogger(__name__)


def build_scene(
    *,
    canvas_size: tuple[int, int],
    constants: Constants,
    seed: int | None = None,
) -> tuple[PaintSurface, AnimationLoop, ControlPanel]:
    """描画面・アニメーションループ・操作パネルを結線して返す（GL 非依存）。"""
    surface = PaintSurface(*canvas_size)
    renderer = GridRenderer(surface, constants)
    loop = AnimationLoop(constants, renderer, seed=seed)
    panel = ControlPanel(loop.dispatch)
    return surface, loop, panel


def run_sketch(
    *,
    canvas_size: tuple[int, int] | None = None,
    fps: int | None = None,
    constants: Constants | None = None,
    seed: int | None = None,
    background: Any = None,
    use_controls: bool | None = None,
    show_hud: bool | None = None,
    init_only: bool = False,
) -> AnimationLoop:
    """アニメーションを実行する（ウィンドウを閉じるまで戻らない）。

    Parameters
    ----------
    canvas_size : tuple[int, int] | None
        描画面 `(width_px, height_px)`。None で設定（`canvas.width/height`）、未設定なら起動時の画面サイズ。
    fps : int | None
        フレーム更新レート。None で設定（`canvas_controller.fps`）、未設定時は 60。
    constants : Constants | None
        描画定数。None で設定（`grid` セクション）と `NGR_GRID_COUNT` から解決。
    seed : int | None
        乱数シード。None で `NGR_SEED`、未設定ならランダム。
    background : tuple | str | None
        ウィンドウ背景色（RGBA 0–1 / Hex / CSS 色）。None で設定/白を適用。
    use_controls : bool | None
        Dear PyGui の操作ウィンドウを使うか。None で設定（`controls.enabled`）/環境変数。
    show_hud : bool | None
        状態 HUD の有効/無効。None で設定（`hud.enabled`）/環境変数。
    init_only : bool, default False
        True でウィンドウ/GL を作らずに、構築済みの AnimationLoop を返す。

    Returns
    -------
    AnimationLoop
        実行（または構築）したアニメーションループ。
    """
    settings = get_settings()
    setup_default_logging(settings.LOG_LEVEL)
    cfg = load_config()

    # ---- ① 設定解決 ------------------------------------------------
    consts = resolve_constants(constants, cfg, count_override=settings.GRID_COUNT)
    # 画面サイズは起動時に 1 度だけ参照する（init_only ではディスプレイに触れない）
    screen_size = None
    if canvas_size is None and not init_only:
        screen_size = query_screen_size()
    width, height = resolve_canvas_size(canvas_size, cfg, screen_size=screen_size)
    fps = resolve_fps(fps, cfg)
    bg_rgba = resolve_background(background, cfg)
    if seed is None:
        seed = settings.SEED
    if use_controls is None:
        use_controls = bool(
            config_section(cfg, "controls").get("enabled", settings.CONTROLS_ENABLED)
        )
    hud_conf = HUDConfig.from_mapping(
        config_section(cfg, "hud"),
        enabled=show_hud if show_hud is not None else (settings.HUD_ENABLED or None),
    )
    logger.info(
        "noisegrid: canvas=%dx%d fps=%d count=%d seed=%s",
        width,
        height,
        fps,
        consts.count,
        seed,
    )

    # ---- ② 状態構築 ------------------------------------------------
    surface, loop, panel = build_scene(canvas_size=(width, height), constants=consts, seed=seed)
    logger.info("grid: %d points", len(loop.grid))

    if init_only:
        return loop

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import moderngl
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock
    from engine.core.render_window import RenderWindow
    from engine.render.renderer import SurfaceRenderer
    from engine.ui.hud.overlay import StatusOverlay

    from .sketch_runner.controls import setup_control_window
    from .sketch_runner.utils import build_projection

    # ---- ③ Window & ModernGL --------------------------------------
    try:
        rendering_window = RenderWindow(width, height, bg_color=bg_rgba)
        mgl_ctx = moderngl.create_context()
        surface_renderer = SurfaceRenderer(
            mgl_ctx,
            build_projection(float(width), float(height)),
            surface,
            framebuffer_size=rendering_window.get_framebuffer_size(),
        )
    except Exception:
        logger.exception("window/GL initialization failed")
        raise

    overlay: StatusOverlay | None = None
    if hud_conf.enabled:
        overlay = StatusOverlay(rendering_window, loop, config=hud_conf)

    def _draw_main() -> None:
        surface_renderer.draw()
        if overlay is not None:
            overlay.draw()

    rendering_window.add_draw_callback(_draw_main)

    # ---- ④ 操作 UI -------------------------------------------------
    control_window = setup_control_window(panel, use_controls)

    # ---- ⑤ FrameClock ---------------------------------------------
    tickables: list[Tickable] = [loop, surface_renderer]
    if overlay is not None:
        tickables.append(overlay)
    frame_clock = FrameClock(tickables)
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps)

    # ---- ⑥ pyglet イベント -----------------------------------------
    def _shutdown() -> None:
        # 冪等なクリーンアップ（ESC とウィンドウの閉じるボタンの双方から呼ばれる）
        if getattr(_shutdown, "_closed", False):
            return
        setattr(_shutdown, "_closed", True)
        pyglet.clock.unschedule(frame_clock.tick)
        try:
            control_window.close()
        except Exception:
            logger.debug("control window close failed", exc_info=True)
        surface_renderer.release()
        logger.info("closed after %d frames", loop.frame_count)
        rendering_window.close()
        pyglet.app.exit()

    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001, ARG001
        if sym == key.ESCAPE:
            _shutdown()
            return pyglet.event.EVENT_HANDLED
        ev: ControlEvent | None = event_for_key(key.symbol_string(sym))
        if ev is not None:
            panel.activate(ev)
            return pyglet.event.EVENT_HANDLED
        return None

    @rendering_window.event
    def on_close():  # noqa: ANN001
        _shutdown()

    pyglet.app.run()
    return loop


__all__ = ["run_sketch", "build_scene"]
