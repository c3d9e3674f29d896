"""
どこで: `engine.ui.hud` の HUD 表示モジュール。
何を: AnimationLoop の状態と FPS を pyglet の Label でオーバーレイ描画する。
なぜ: 実行時の状態を即座に可視化し、操作のフィードバックを高めるため。
"""

from __future__ import annotations

import pyglet
from pyglet.window import Window

from engine.core.animation import AnimationLoop

from ...core.tickable import Tickable
from .config import HUDConfig
from .status import format_status


class StatusOverlay(Tickable):
    """ウィンドウ左下に状態行を描く。"""

    def __init__(self, window: Window, loop: AnimationLoop, *, config: HUDConfig | None = None):
        self.window = window
        self.loop = loop
        self._config = config or HUDConfig(enabled=True)
        self._fps: float = 0.0
        self._label = pyglet.text.Label(
            "",
            font_size=self._config.font_size,
            x=8,
            y=8,
            anchor_x="left",
            anchor_y="bottom",
            color=self._config.text_color,
        )

    @property
    def fps(self) -> float:
        return self._fps

    def tick(self, dt: float) -> None:
        if dt > 0:
            inst = 1.0 / dt
            a = self._config.smoothing_alpha
            self._fps = inst if self._fps == 0.0 else (1.0 - a) * self._fps + a * inst
        self._label.text = format_status(self.loop, self._fps)

    def draw(self) -> None:
        self._label.draw()
