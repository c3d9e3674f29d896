"""
どこで: `engine.core` の更新インターフェース。
何を: 1フレーム更新 `tick(dt)` を持つ `Tickable` Protocol を定義。
なぜ: アニメーションループ/GPU 転送/HUD/操作ウィンドウを FrameClock から一様に駆動するため。
"""

from typing import Protocol


class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース。"""

    def tick(self, dt: float) -> None:
        """内部状態を 1 フレームぶん進める（`dt` は前回呼び出しからの秒数）。"""
