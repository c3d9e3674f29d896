"""
どこで: `engine.core.animation`。
何を: 1 フレームの手順（フェードイン → 点群更新 → 残像オーバーレイ → 点群描画）を実行する `AnimationLoop`。
なぜ: 点群/操作状態/ノイズを 1 つの所有者に集約し、表示ループ無しでも同期的に駆動・検証できるようにするため。

使用例:
    surface = PaintSurface(800, 600)
    loop = AnimationLoop(Constants(), GridRenderer(surface, Constants()), seed=1)
    loop.dispatch(ControlEvent.INCREASE)
    loop.advance_frame()

スレッド:
- 単一スレッド前提。イベントはフレームの合間に `dispatch()` で届く（フレーム途中では呼ばれない）。
- 再スタートは点群を丸ごと差し替える（部分更新はしない）。
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from engine.render.grid import GridRenderer

from .noise import NoiseSource
from .points import PointGrid, create_point_grid, update_point_grid
from .state import Constants, ControlEvent, ControlState
from .tickable import Tickable

logger = logging.getLogger(__name__)

_SEED_MAX = 2**63 - 1
_MASK64 = 0xFFFFFFFFFFFFFFFF


class AnimationLoop(Tickable):
    """点群アニメーションのフレーム状態機械。

    Parameters
    ----------
    constants : Constants
        凍結済みの描画定数。
    renderer : GridRenderer
        描画面への命令発行者。
    seed : int | None
        乱数シード（負値は 64bit に畳み込む）。指定時は点群の間引き・ノイズ・再スタート後の再シードまで再現可能。
    control : ControlState | None
        共有する操作状態（None で既定値）。
    prime : bool, default True
        生成時に下塗り（黒 10%）を描画面へ発行するか。
    """

    def __init__(
        self,
        constants: Constants,
        renderer: GridRenderer,
        *,
        seed: int | None = None,
        control: ControlState | None = None,
        prime: bool = True,
    ) -> None:
        self.constants = constants
        self.renderer = renderer
        self.control = control if control is not None else ControlState()
        # 負のシードも 64bit に畳み込んで受け付ける
        self._rng = np.random.default_rng(None if seed is None else int(seed) & _MASK64)
        self.noise = NoiseSource(self._next_seed())
        self.grid: PointGrid = create_point_grid(constants, self._rng)
        self.frame_count = 0
        self.restart_count = 0
        self._handlers: dict[ControlEvent, Callable[[], None]] = {
            ControlEvent.INCREASE: lambda: self.control.increase(constants.alteration_step),
            ControlEvent.DECREASE: lambda: self.control.decrease(constants.alteration_step),
            ControlEvent.REVERSE: self.control.reverse,
            ControlEvent.PAUSE: lambda: self.control.toggle_pause(constants.alteration_step),
            ControlEvent.CARNAGE: self.control.unleash_carnage,
            ControlEvent.RESTART: self.restart,
        }
        logger.debug("grid created: %d points (count=%d)", len(self.grid), constants.count)
        if prime:
            renderer.prime()

    def _next_seed(self) -> int:
        return int(self._rng.integers(0, _SEED_MAX))

    # ---- フレーム ----
    def advance_frame(self) -> None:
        """1 フレーム進める。"""
        c = self.constants
        self.control.fade_in(c.alpha_step)
        update_point_grid(self.grid, self.control, self.noise, c)
        self.renderer.clean_slate(self.control)
        self.renderer.render_grid(self.grid, self.control)
        self.frame_count += 1

    def tick(self, dt: float) -> None:
        self.advance_frame()

    # ---- 操作 ----
    def dispatch(self, event: ControlEvent | str) -> None:
        """操作イベントを適用する（未知のイベント名は ValueError）。"""
        ev = ControlEvent(event)
        self._handlers[ev]()
        logger.debug(
            "control %s -> alteration=%s carnage=%s",
            ev.value,
            self.control.alteration,
            self.control.carnage,
        )

    def restart(self) -> None:
        """カーネージ解除・ノイズ再シード・点群の再生成・変位量リセット（alpha は維持）。"""
        self.control.reset_for_restart()
        self.noise = self.noise.reseed(self._next_seed())
        self.grid = create_point_grid(self.constants, self._rng)
        self.restart_count += 1
        logger.debug("restart #%d: %d points", self.restart_count, len(self.grid))


__all__ = ["AnimationLoop"]
