"""
どこで: `engine.core.points`。
何を: 点エンティティ `Point`、点群 `PointGrid`、生成 `create_point_grid` と毎フレーム更新 `update_point_grid`。
なぜ: 描画ループから切り離した純粋な状態遷移として実装し、表示なしでテストできるようにするため。

更新規則（1 フレーム）:
- ノイズは座標の二乗 `(x*x, y*y)` で引く（空間周波数を非一様にする意図的な歪み）。
- 色相は毎フレーム +1（折り返しは色関数側）。
- 変位量が 0 でなければ、同じノイズ値で x と y を同量ずつ動かす。
- カーネージ中かつ変位量が 0 でなければ、生のノイズ値を回転累積へ加える。
- クランプ/折り返しは一切しない。
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .noise import NoiseSource
from .state import Constants, ControlState

# 行インデックスから色相を割り当てる係数（100 行で 360 度）
HUE_PER_ROW: float = 360.0 / 100.0


@dataclass
class Point:
    """1 点の状態（正規化座標・色相・回転累積）。"""

    hue: float
    x: float
    y: float
    rotation: float = 0.0


@dataclass
class PointGrid:
    """点群。生成後は点数を変えず、各点をその場で更新する。"""

    points: list[Point] = field(default_factory=list)
    # 生成時の値のまま保持（描画では参照しない）
    rotation: float = 0.0

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


def lattice_size(count: int) -> int:
    """間引き前の候補点数。"""
    return int(count) * int(count)


def iter_lattice(count: int):
    """列優先（x 外側、y 内側）で候補点を生成する。"""
    n = int(count)
    for x in range(n):
        for y in range(n):
            yield Point(hue=(n - y) * HUE_PER_ROW, x=x / n, y=y / n, rotation=0.0)


def create_point_grid(
    constants: Constants, rng: np.random.Generator | None = None
) -> PointGrid:
    """候補格子を確率 `keep_probability` で間引いた点群を作る。

    乱数は `rng.random() > 1 - keep_probability` で判定し、相対順序は保つ。
    """
    gen = rng if rng is not None else np.random.default_rng()
    candidates = list(iter_lattice(constants.count))
    draws = gen.random(len(candidates))
    threshold = 1.0 - float(constants.keep_probability)
    kept = [p for p, d in zip(candidates, draws) if d > threshold]
    return PointGrid(points=kept, rotation=0.0)


def update_point_grid(
    grid: PointGrid,
    control: ControlState,
    noise: NoiseSource,
    constants: Constants,
) -> PointGrid:
    """点群を 1 フレーム進める（その場更新し、同じ点群を返す）。"""
    points = grid.points
    if not points:
        return grid

    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    samples = noise.sample_many(xs * xs, ys * ys)

    shift = control.alteration / constants.alteration_divisor
    moving = shift != 0
    spinning = moving and control.carnage
    hue_step = constants.hue_step

    for p, n in zip(points, samples.tolist()):
        p.hue += hue_step
        if moving:
            p.x += n * shift
            p.y += n * shift
        if spinning:
            p.rotation += n
    return grid


__all__ = [
    "Point",
    "PointGrid",
    "HUE_PER_ROW",
    "lattice_size",
    "iter_lattice",
    "create_point_grid",
    "update_point_grid",
]
