"""
どこで: `engine.core.noise`。
何を: 2D シンプレックスノイズ（Numba 最適化）と、シード付きの `NoiseSource` を提供。
なぜ: 点群の毎フレーム変位に決定的かつ連続的な [-1, 1] の値が必要で、再シードで別系列へ切り替えるため。

実装メモ:
- 置換表は SplitMix64 で混ぜたシードから LCG 駆動の Fisher–Yates で決定的に生成する。
- 勾配は 12 方向（3D 勾配表の x/y 成分）を使う古典的な 2D シンプレックス。
- 出力は 70 倍スケールで概ね [-1, 1]。
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit  # type: ignore[attr-defined]

_F2: float = 0.5 * (math.sqrt(3.0) - 1.0)
_G2: float = (3.0 - math.sqrt(3.0)) / 6.0

GRAD3 = np.array(
    [
        [1, 1, 0],
        [-1, 1, 0],
        [1, -1, 0],
        [-1, -1, 0],
        [1, 0, 1],
        [-1, 0, 1],
        [1, 0, -1],
        [-1, 0, -1],
        [0, 1, 1],
        [0, -1, 1],
        [0, 1, -1],
        [0, -1, -1],
    ],
    dtype=np.float64,
)

_MASK64 = 0xFFFFFFFFFFFFFFFF


def _splitmix64(x: int) -> int:
    """SplitMix64 由来の簡易 64bit ミキサ（近いシード同士を散らす）。"""
    z = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    z = z ^ (z >> 31)
    return z & _MASK64


def _lcg_step(x: int) -> int:
    return (6364136223846793005 * x + 1442695040888963407) & _MASK64


def build_permutation(seed: int) -> np.ndarray:
    """シードから長さ 512 の置換表（0..255 の並べ替えを 2 回連結）を作る。"""
    arr = list(range(256))
    st = _splitmix64(seed & _MASK64)
    for i in range(255, 0, -1):
        st = _lcg_step(st)
        # 下位ビットは周期が短いので上位 32bit を使う
        j = (st >> 32) % (i + 1)
        arr[i], arr[j] = arr[j], arr[i]
    return np.array(arr + arr, dtype=np.int64)


@njit(fastmath=True, cache=True)
def _corner(t, gx, gy, x, y):
    if t < 0.0:
        return 0.0
    t *= t
    return t * t * (gx * x + gy * y)


@njit(fastmath=True, cache=True)
def simplex2(xin, yin, perm, grad3):
    """2次元シンプレックスノイズ（概ね [-1, 1]）。"""
    s = (xin + yin) * _F2
    i = np.floor(xin + s)
    j = np.floor(yin + s)
    t = (i + j) * _G2
    x0 = xin - (i - t)
    y0 = yin - (j - t)

    # どちらの三角形に属するか
    if x0 > y0:
        i1 = 1
        j1 = 0
    else:
        i1 = 0
        j1 = 1

    x1 = x0 - i1 + _G2
    y1 = y0 - j1 + _G2
    x2 = x0 - 1.0 + 2.0 * _G2
    y2 = y0 - 1.0 + 2.0 * _G2

    ii = int(i) & 255
    jj = int(j) & 255
    gi0 = perm[ii + perm[jj]] % 12
    gi1 = perm[ii + i1 + perm[jj + j1]] % 12
    gi2 = perm[ii + 1 + perm[jj + 1]] % 12

    n0 = _corner(0.5 - x0 * x0 - y0 * y0, grad3[gi0, 0], grad3[gi0, 1], x0, y0)
    n1 = _corner(0.5 - x1 * x1 - y1 * y1, grad3[gi1, 0], grad3[gi1, 1], x1, y1)
    n2 = _corner(0.5 - x2 * x2 - y2 * y2, grad3[gi2, 0], grad3[gi2, 1], x2, y2)
    return 70.0 * (n0 + n1 + n2)


@njit(fastmath=True, cache=True)
def simplex2_many(xs, ys, perm, grad3):
    """座標配列に対する `simplex2` の一括評価。"""
    n = xs.shape[0]
    out = np.empty(n, dtype=np.float64)
    for k in range(n):
        out[k] = simplex2(xs[k], ys[k], perm, grad3)
    return out


def _random_seed() -> int:
    return int(np.random.default_rng().integers(0, 2**63 - 1))


class NoiseSource:
    """シード付きの決定的 2D ノイズ関数。

    同じシード・同じ座標なら常に同じ値を返す。`reseed()` は新しいシードの別インスタンスを返し、
    自身は変更しない（進行中のフレームが古い系列を参照していても安全）。
    """

    __slots__ = ("_seed", "_perm")

    def __init__(self, seed: int | None = None) -> None:
        self._seed = _random_seed() if seed is None else int(seed)
        self._perm = build_permutation(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def sample(self, x: float, y: float) -> float:
        """座標 `(x, y)` のノイズ値（概ね [-1, 1]）。"""
        return float(simplex2(float(x), float(y), self._perm, GRAD3))

    def sample_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """座標列を一括評価する（`xs`/`ys` は同じ長さ）。"""
        ax = np.ascontiguousarray(xs, dtype=np.float64)
        ay = np.ascontiguousarray(ys, dtype=np.float64)
        if ax.shape != ay.shape:
            raise ValueError(f"xs/ys shape mismatch: {ax.shape} vs {ay.shape}")
        if ax.size == 0:
            return np.zeros(0, dtype=np.float64)
        return simplex2_many(ax.ravel(), ay.ravel(), self._perm, GRAD3)

    def reseed(self, seed: int | None = None) -> "NoiseSource":
        """新しいシードのインスタンスを返す（`seed=None` でランダム）。"""
        return NoiseSource(seed)

    def __repr__(self) -> str:
        return f"NoiseSource(seed={self._seed})"


__all__ = ["NoiseSource", "build_permutation", "simplex2", "simplex2_many", "GRAD3"]
