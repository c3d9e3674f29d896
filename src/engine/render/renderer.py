"""
どこで: `engine.render` の高レベル描画。
何を: `PaintSurface` の頂点バッチを持続的なオフスクリーン FBO へ合成し、毎描画でウィンドウへ提示する。
なぜ: 前フレームの描画を消さずに重ねる（残像）キャンバスの性質を GPU 上で再現するため。

ブレンド:
- FBO への塗り: キャンバスの source-over と同じく、色は `SRC_ALPHA, ONE_MINUS_SRC_ALPHA`、
  アルファは `ONE, ONE_MINUS_SRC_ALPHA`。結果は乗算済みアルファとして FBO に残る。
- 画面への提示: 乗算済みなので `ONE, ONE_MINUS_SRC_ALPHA` で背景色の上に重ねる。
"""

from __future__ import annotations

from typing import Any, Sequence

import moderngl as mgl
import numpy as np

from ..core.tickable import Tickable
from .mesh import TriangleMesh
from .shader import Shader
from .surface import PaintSurface

# 全画面矩形（TRIANGLE_STRIP）: in_pos(x, y), in_uv(u, v)
_FULLSCREEN_QUAD = np.array(
    [
        [-1.0, -1.0, 0.0, 0.0],
        [1.0, -1.0, 1.0, 0.0],
        [-1.0, 1.0, 0.0, 1.0],
        [1.0, 1.0, 1.0, 1.0],
    ],
    dtype="f4",
)


class SurfaceRenderer(Tickable):
    """
    描画面（CPU 側の命令記録）から GPU（持続 FBO）への転送と、画面提示を管理。
    """

    def __init__(
        self,
        mgl_context: Any,
        projection_matrix: np.ndarray,
        surface: PaintSurface,
        *,
        framebuffer_size: Sequence[int] | None = None,
    ):
        """
        mgl_context: ウィンドウに紐づく ModernGL コンテキスト
        projection_matrix: キャンバス px → クリップ空間の正射影（転置済み）
        surface: 描画命令を記録する PaintSurface
        framebuffer_size: 画面側のフレームバッファ寸法（HiDPI 用）。None なら面と同寸。
        """
        self.ctx = mgl_context
        self.surface = surface
        size = (surface.width, surface.height)
        self._screen_size = tuple(int(v) for v in (framebuffer_size or size))

        # 塗り用
        self.paint_program = Shader.create_paint_program(mgl_context)
        self.paint_program["projection"].write(np.asarray(projection_matrix, dtype="f4").tobytes())
        self.mesh = TriangleMesh(ctx=mgl_context, program=self.paint_program)

        # 持続オフスクリーン面（透明で初期化）
        self.texture = mgl_context.texture(size, 4)
        self.texture.filter = (mgl.LINEAR, mgl.LINEAR)
        self.fbo = mgl_context.framebuffer(color_attachments=[self.texture])
        self.fbo.clear(0.0, 0.0, 0.0, 0.0)

        # 提示用
        self.present_program = Shader.create_present_program(mgl_context)
        self._quad_vbo = mgl_context.buffer(_FULLSCREEN_QUAD.tobytes())
        self._quad_vao = mgl_context.vertex_array(
            self.present_program, [(self._quad_vbo, "2f 2f", "in_pos", "in_uv")]
        )

        # HUD 連携用: 直近に合成した矩形数
        self._last_rect_count: int = 0

    # --------------------------------------------------------------------- #
    # Tickable                                                               #
    # --------------------------------------------------------------------- #
    def tick(self, dt: float) -> None:
        """
        毎フレーム呼ばれ、描画面に記録された命令を FBO へ合成する。
        """
        vertices = self.surface.take_vertices()
        if vertices.shape[0] == 0:
            return
        self.mesh.upload(vertices)
        self._last_rect_count = int(vertices.shape[0]) // 6

        self.fbo.use()
        self.ctx.enable(mgl.BLEND)
        self.ctx.blend_func = (
            mgl.SRC_ALPHA,
            mgl.ONE_MINUS_SRC_ALPHA,
            mgl.ONE,
            mgl.ONE_MINUS_SRC_ALPHA,
        )
        self.mesh.render(mgl.TRIANGLES)
        self.ctx.screen.use()

    # --------------------------------------------------------------------- #
    # Public drawing API                                                    #
    # --------------------------------------------------------------------- #
    def draw(self) -> None:
        """FBO の内容を画面に描画"""
        self.ctx.screen.use()
        self.ctx.viewport = (0, 0, self._screen_size[0], self._screen_size[1])
        self.ctx.enable(mgl.BLEND)
        self.ctx.blend_func = (mgl.ONE, mgl.ONE_MINUS_SRC_ALPHA)
        self.texture.use(location=0)
        self.present_program["surface"].value = 0
        self._quad_vao.render(mgl.TRIANGLE_STRIP)

    def set_framebuffer_size(self, width: int, height: int) -> None:
        """画面側フレームバッファ寸法を更新する（面のサイズは固定のまま）。"""
        self._screen_size = (max(1, int(width)), max(1, int(height)))

    def get_last_rect_count(self) -> int:
        return self._last_rect_count

    def release(self) -> None:
        """GPU リソースを解放。"""
        self.mesh.release()
        self._quad_vao.release()
        self._quad_vbo.release()
        self.fbo.release()
        self.texture.release()
        self.paint_program.release()
        self.present_program.release()


__all__ = ["SurfaceRenderer"]
