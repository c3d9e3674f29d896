"""
どこで: `engine.render.surface`。
何を: 2D キャンバス相当の描画面 `PaintSurface`（fill_rect/save/restore/rotate/set_fill_style）。
なぜ: 描画命令を GPU 非依存の三角形バッチへ記録し、GL 転送（SurfaceRenderer）とテストを分離するため。

座標系:
- 原点は左上、y は下向き（ピクセル単位）。
- 変換行列はキャンバスと同じ `(a, b, c, d, e, f)` 表現で、`rotate` は右から掛ける（累積する）。

バッチ形式:
- 1 頂点 = `(x, y, r, g, b, a)` の float32。1 矩形 = 2 三角形 = 6 頂点。
- 記録順がそのまま描画順（後の矩形が前の矩形に重なる）。
"""

from __future__ import annotations

import logging
import math

import numpy as np

from util.color import RGBA, parse_css_color

logger = logging.getLogger(__name__)

FLOATS_PER_VERTEX = 6
VERTICES_PER_RECT = 6

Matrix = tuple[float, float, float, float, float, float]
IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


class PaintSurface:
    """固定サイズの 2D 描画面（命令を頂点バッチとして記録する）。"""

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"surface size must be positive, got {(width, height)}")
        self._width = int(width)
        self._height = int(height)
        self._matrix: Matrix = IDENTITY
        self._fill_style = "#000000"
        self._fill: RGBA = (0.0, 0.0, 0.0, 1.0)
        self._stack: list[tuple[Matrix, str, RGBA]] = []
        self._batch: list[float] = []
        self._rects = 0

    # ---- サイズ/状態 ----
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def transform(self) -> Matrix:
        return self._matrix

    @property
    def fill_style(self) -> str:
        return self._fill_style

    @property
    def fill_rgba(self) -> RGBA:
        return self._fill

    @property
    def depth(self) -> int:
        """`save()` の入れ子数。"""
        return len(self._stack)

    @property
    def pending_rects(self) -> int:
        return self._rects

    # ---- 状態スタック ----
    def save(self) -> None:
        self._stack.append((self._matrix, self._fill_style, self._fill))

    def restore(self) -> None:
        # 対応する save が無い restore は何もしない（キャンバスと同じ）
        if not self._stack:
            return
        self._matrix, self._fill_style, self._fill = self._stack.pop()

    # ---- 変換 ----
    def rotate(self, angle: float) -> None:
        """現在の変換に回転 `angle` [rad] を右から合成する。"""
        cos = math.cos(angle)
        sin = math.sin(angle)
        a, b, c, d, e, f = self._matrix
        self._matrix = (
            a * cos + c * sin,
            b * cos + d * sin,
            c * cos - a * sin,
            d * cos - b * sin,
            e,
            f,
        )

    def reset_transform(self) -> None:
        self._matrix = IDENTITY

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """点 `(x, y)` に現在の変換を適用した座標を返す。"""
        a, b, c, d, e, f = self._matrix
        return (a * x + c * y + e, b * x + d * y + f)

    # ---- 塗り ----
    def set_fill_style(self, color: str) -> None:
        """塗り色を CSS 色文字列で設定する。解釈できない値は無視する（キャンバスと同じ）。"""
        try:
            rgba = parse_css_color(color)
        except ValueError:
            logger.debug("ignored invalid fill style: %r", color)
            return
        self._fill_style = color
        self._fill = rgba

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        """現在の変換と塗り色で矩形を記録する。"""
        a, b, c, d, e, f = self._matrix
        r, g, bl, al = self._fill
        x1 = x + w
        y1 = y + h
        # 4 隅（左上/右上/右下/左下）
        p0x, p0y = a * x + c * y + e, b * x + d * y + f
        p1x, p1y = a * x1 + c * y + e, b * x1 + d * y + f
        p2x, p2y = a * x1 + c * y1 + e, b * x1 + d * y1 + f
        p3x, p3y = a * x + c * y1 + e, b * x + d * y1 + f
        self._batch.extend(
            (
                p0x, p0y, r, g, bl, al,
                p1x, p1y, r, g, bl, al,
                p2x, p2y, r, g, bl, al,
                p0x, p0y, r, g, bl, al,
                p2x, p2y, r, g, bl, al,
                p3x, p3y, r, g, bl, al,
            )
        )  # fmt: skip
        self._rects += 1

    def fill_all(self, color: str) -> None:
        """変換を無視して面全体を `color` で塗る（状態は保存/復元する）。"""
        self.save()
        self.reset_transform()
        self.set_fill_style(color)
        self.fill_rect(0.0, 0.0, float(self._width), float(self._height))
        self.restore()

    # ---- バッチ ----
    def take_vertices(self) -> np.ndarray:
        """記録済み頂点を `(N, 6)` float32 で取り出し、バッチを空にする。"""
        data = np.asarray(self._batch, dtype=np.float32).reshape(-1, FLOATS_PER_VERTEX)
        self._batch = []
        self._rects = 0
        return data


__all__ = ["PaintSurface", "IDENTITY", "FLOATS_PER_VERTEX", "VERTICES_PER_RECT"]
