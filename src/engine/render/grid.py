"""
どこで: `engine.render.grid`。
何を: 点群と操作状態を `PaintSurface` への描画命令（回転・塗り色・矩形）に翻訳する `GridRenderer`。
なぜ: 「何をどの順で塗るか」を GPU 転送から分離し、命令列として検証可能にするため。

描画規則:
- 点ごとに `rotate(rotation ** 2)` を行い、同一フレーム内では前の点の回転に累積させる。
- グリッド全体を save/restore で囲み、累積回転を次フレームへ持ち越さない。
- 残像オーバーレイは白の半透明で面全体を塗る（一時停止中は 2 倍の濃さ）。
"""

from __future__ import annotations

from engine.core.points import PointGrid
from engine.core.state import Constants, ControlState
from util.color import hsla, lerp, rgba

from .surface import PaintSurface

# 起動直後に 1 度だけ敷く下塗り
PRIME_COLOR = rgba(0, 0, 0, 0.1)


class GridRenderer:
    """点群を描画面へ塗る。"""

    def __init__(self, surface: PaintSurface, constants: Constants) -> None:
        self.surface = surface
        self.constants = constants
        # 余白は幅基準のピクセル量を縦横共通で使う
        self.margin = float(surface.width) * float(constants.margin_ratio)

    def prime(self) -> None:
        """初期の下塗りを行う。"""
        self.surface.fill_all(PRIME_COLOR)

    def overlay_alpha(self, control: ControlState) -> float:
        """このフレームの残像オーバーレイ不透明度。"""
        blur = self.constants.blur
        if control.alteration == 0:
            blur *= 2
        return blur

    def clean_slate(self, control: ControlState) -> None:
        """前フレームまでの描画を白で薄める。"""
        self.surface.fill_all(rgba(255, 255, 255, self.overlay_alpha(control)))

    def point_color(self, hue: float, control: ControlState) -> str:
        c = self.constants
        return hsla(hue, c.saturation, c.lightness, control.alpha)

    def render_grid(self, grid: PointGrid, control: ControlState) -> int:
        """点群を描画し、塗った点数を返す。"""
        surface = self.surface
        c = self.constants
        margin = self.margin
        right = surface.width - margin
        bottom = surface.height - margin
        w = c.point_width
        h = c.point_height

        surface.save()
        try:
            for p in grid.points:
                surface.rotate(p.rotation * p.rotation)
                surface.set_fill_style(self.point_color(p.hue, control))
                surface.fill_rect(lerp(margin, right, p.x), lerp(margin, bottom, p.y), w, h)
        finally:
            surface.restore()
        return len(grid.points)


__all__ = ["GridRenderer", "PRIME_COLOR"]
