"""
どこで: `engine.ui.controls` の Dear PyGui 実装。
何を: ControlPanel のボタン群を操作ウィンドウとして表示し、押下・表示切替・表記更新を反映する。
なぜ: ウィンドウ寿命管理と DPG ドライバ制御だけを担い、規則は ControlPanel へ委譲して単純化するため。

スレッド:
- DPG のコールバックは手動管理（`manual_callback_management`）にし、pyglet の clock から
  `render_dearpygui_frame()` → `run_callbacks()` を主スレッドで回す。
  よって押下は必ずフレームの合間に AnimationLoop へ届く。
"""

from __future__ import annotations

import logging
from typing import Any

import dearpygui.dearpygui as dpg  # type: ignore

from engine.core.state import ControlEvent

from .panel import ButtonGroup, ControlPanel

# タグ定数
ROOT_TAG = "__ngr_controls_root__"
GROUP_TAGS: dict[ButtonGroup, str] = {
    ButtonGroup.FIRST: "__ngr_controls_first__",
    ButtonGroup.SECOND: "__ngr_controls_second__",
}

logger = logging.getLogger("engine.ui.controls.dpg")


def _button_tag(event: ControlEvent) -> str:
    return f"__ngr_btn_{event.value}__"


class ControlWindow:
    """Dear PyGui による操作ウィンドウ。"""

    def __init__(
        self,
        panel: ControlPanel,
        *,
        width: int = 320,
        height: int = 120,
        title: str = "Controls",
        auto_show: bool = True,
    ) -> None:
        self._panel = panel
        self._width = width
        self._height = height
        self._title = title
        self._visible = False
        self._driver: Any | None = None
        self._closing: bool = False

        dpg.create_context()
        dpg.configure_app(manual_callback_management=True)
        dpg.create_viewport(title=self._title, width=self._width, height=self._height)
        dpg.setup_dearpygui()

        self._build_root_window()
        self._sync(panel)
        self._panel.subscribe(self._sync)

        if auto_show:
            dpg.show_viewport()
            self._visible = True
            self._start_driver()

    # ---- 構築 ----
    def _build_root_window(self) -> None:
        with dpg.window(tag=ROOT_TAG, label=self._title, no_title_bar=True):
            for group, tag in GROUP_TAGS.items():
                with dpg.group(tag=tag, horizontal=True):
                    for ev in self._panel.buttons(group):
                        dpg.add_button(
                            tag=_button_tag(ev),
                            label=self._panel.label(ev),
                            user_data=ev,
                            callback=self._on_button,
                        )
        dpg.set_primary_window(ROOT_TAG, True)

    def _on_button(self, _sender: Any, _app_data: Any, user_data: ControlEvent) -> None:
        try:
            self._panel.activate(user_data)
        except Exception:
            logger.exception("control %s failed", getattr(user_data, "value", user_data))

    def _sync(self, panel: ControlPanel) -> None:
        """パネル状態（群の表示/ボタン表記）を DPG アイテムへ反映する。"""
        if self._closing:
            return
        for group, tag in GROUP_TAGS.items():
            dpg.configure_item(tag, show=panel.is_visible(group))
        for ev in ControlEvent:
            dpg.configure_item(_button_tag(ev), label=panel.label(ev))

    # ---- 表示/終了 ----
    def set_visible(self, visible: bool) -> None:
        if visible and not self._visible:
            dpg.show_viewport()
            self._visible = True
            self._start_driver()
        elif not visible and self._visible:
            dpg.hide_viewport()
            self._visible = False
            self._stop_driver()

    def close(self) -> None:
        # 閉鎖フラグを最初に立て、以降の _tick/_sync を無害化
        self._closing = True
        self._panel.unsubscribe(self._sync)

        # ドライバ停止 → コンテキスト破棄（順序厳守）
        self._stop_driver()
        try:
            dpg.stop_dearpygui()
            dpg.destroy_context()
        except Exception:
            logger.debug("dearpygui teardown failed", exc_info=True)

    # ---- internal: drivers ----
    def _tick(self, _dt: float) -> None:
        if self._closing:
            return
        if not dpg.is_dearpygui_running():
            # ユーザーが操作ウィンドウだけを閉じた（描画は続行）
            self._closing = True
            self._stop_driver()
            logger.info("control window closed; keyboard controls remain available")
            return
        dpg.render_dearpygui_frame()
        dpg.run_callbacks(dpg.get_callback_queue())

    def _start_driver(self) -> None:
        if self._driver is not None:
            return
        import pyglet

        pyglet.clock.schedule_interval(self._tick, 1.0 / 60.0)
        self._driver = self._tick
        logger.debug("ControlWindow: pyglet driver started")

    def _stop_driver(self) -> None:
        drv = self._driver
        self._driver = None
        if drv is None:
            return
        import pyglet

        pyglet.clock.unschedule(drv)


__all__ = ["ControlWindow"]
