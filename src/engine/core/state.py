"""
どこで: `engine.core.state`。
何を: 起動時に凍結する描画定数 `Constants`、フレーム間で共有する `ControlState`、操作イベント `ControlEvent`。
なぜ: UI からの変更点を小さな可変レコードに閉じ込め、更新/描画は引数として受け取るだけにするため。

Notes
-----
- `alpha` はフェードイン用で、再スタートでも戻さない。
- `carnage` は一方向ラッチ（再スタートでのみ解除）。
- 一時停止は「0 ⇔ +step」のトグルで、直前の向き/大きさは保持しない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping

logger = logging.getLogger(__name__)

# これを超える解像度はホストが固まる恐れがある（ガードはせず警告のみ）
COUNT_WARN_THRESHOLD = 250


@dataclass(frozen=True)
class Constants:
    """起動時に確定する描画定数。

    Parameters
    ----------
    count : int
        格子解像度（`count × count` の候補点）。
    margin_ratio : float
        余白（サーフェス幅に対する比率）。縦横とも同じピクセル量を使う。
    blur : float
        残像用オーバーレイの不透明度（一時停止中は 2 倍）。
    point_width, point_height : float
        点の描画サイズ [px]。
    alteration_step : float
        操作イベントで設定される変位量の大きさ。
    """

    count: int = 125
    margin_ratio: float = 0.1
    blur: float = 0.1
    point_width: float = 20.0
    point_height: float = 20.0
    alteration_step: float = 0.5
    alpha_step: float = 0.01
    hue_step: float = 1.0
    alteration_divisor: float = 20000.0
    keep_probability: float = 0.2
    saturation: float = 75.0
    lightness: float = 80.0

    def validate(self) -> "Constants":
        """値域を検証して自身を返す（不正なら ValueError）。"""
        if int(self.count) < 1:
            raise ValueError(f"count must be >= 1, got {self.count}")
        if self.point_width <= 0 or self.point_height <= 0:
            raise ValueError(
                f"point size must be > 0, got {(self.point_width, self.point_height)}"
            )
        if not (0.0 <= self.blur <= 1.0):
            raise ValueError(f"blur must be within [0, 1], got {self.blur}")
        if not (0.0 <= self.margin_ratio <= 1.0):
            raise ValueError(f"margin_ratio must be within [0, 1], got {self.margin_ratio}")
        if not (0.0 <= self.keep_probability <= 1.0):
            raise ValueError(f"keep_probability must be within [0, 1], got {self.keep_probability}")
        if self.alteration_divisor == 0:
            raise ValueError("alteration_divisor must be non-zero")
        if self.count > COUNT_WARN_THRESHOLD:
            logger.warning(
                "grid count %d is large (%d candidates); rendering may stall",
                self.count,
                self.count * self.count,
            )
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "Constants":
        """設定辞書（YAML の `grid` セクション）から生成する。未知キーは無視。"""
        if not data:
            return cls().validate()
        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            f = known.get(str(key))
            if f is None:
                logger.debug("unknown grid option ignored: %s", key)
                continue
            try:
                kwargs[f.name] = int(value) if f.name == "count" else float(value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"invalid value for grid.{f.name}: {value!r}") from e
        return cls(**kwargs).validate()


class ControlEvent(str, Enum):
    """UI から届く離散イベント（ペイロードなし）。"""

    INCREASE = "increase"
    DECREASE = "decrease"
    REVERSE = "reverse"
    PAUSE = "pause"
    CARNAGE = "carnage"
    RESTART = "restart"


@dataclass
class ControlState:
    """フレーム間で共有する操作状態。"""

    alpha: float = 0.0
    alteration: float = 0.0
    carnage: bool = False

    @property
    def paused(self) -> bool:
        return self.alteration == 0

    def fade_in(self, step: float) -> None:
        """`alpha` を `step` だけ上げる（1 を上限とする）。"""
        if self.alpha < 1:
            self.alpha = min(1.0, self.alpha + step)

    def increase(self, step: float) -> None:
        self.alteration = step

    def decrease(self, step: float) -> None:
        self.alteration = -step

    def reverse(self) -> None:
        self.alteration = -self.alteration

    def toggle_pause(self, step: float) -> None:
        self.alteration = step if self.alteration == 0 else 0.0

    def unleash_carnage(self) -> None:
        self.carnage = True

    def reset_for_restart(self) -> None:
        """再スタート時の状態リセット（`alpha` はそのまま）。"""
        self.carnage = False
        self.alteration = 0.0


__all__ = ["Constants", "ControlEvent", "ControlState", "COUNT_WARN_THRESHOLD"]
