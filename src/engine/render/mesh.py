"""
どこで: `engine.render` の低レベルメッシュ層。
何を: 色付き三角形バッチ用の VBO/VAO の確保・更新・解放を担当する `TriangleMesh`。
なぜ: GPU 転送の詳細を SurfaceRenderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .surface import FLOATS_PER_VERTEX

# 頂点レイアウト: in_pos(vec2) + in_color(vec4)
VERTEX_FORMAT = "2f 4f"
VERTEX_ATTRS = ("in_pos", "in_color")


class TriangleMesh:
    """
    描画面の頂点バッチ（x, y, r, g, b, a）を GPU へ送り、三角形として描く。
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期GPUメモリ確保量（既定: 1MB）。必要に応じて自動拡張。
        initial_reserve: int = 1 * 1024 * 1024,
    ):
        """
        ctx: moderngl コンテキスト
        program: 塗り用シェーダープログラム
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()
        self.vertex_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program, [(self.vbo, VERTEX_FORMAT, *VERTEX_ATTRS)]
        )

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        if vbo_size <= self.vbo.size:
            return
        self.vao.release()
        self.vbo.release()
        self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.vbo.size * 2), dynamic=True)
        # VBO が差し替わったら VAO を張り直す
        self.vao = self._build_vao()

    def upload(self, vertices: np.ndarray) -> None:
        """`(N, 6)` float32 の頂点列を GPU へ送る。"""
        data = np.ascontiguousarray(vertices, dtype=np.float32)
        if data.ndim != 2 or data.shape[1] != FLOATS_PER_VERTEX:
            raise ValueError(f"vertices must have shape (N, {FLOATS_PER_VERTEX}), got {data.shape}")
        self._ensure_capacity(data.nbytes)
        self.vbo.orphan()
        self.vbo.write(data.tobytes())
        self.vertex_count = int(data.shape[0])

    def render(self, mode: int) -> None:
        if self.vertex_count > 0:
            self.vao.render(mode, vertices=self.vertex_count)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vao.release()
        self.vbo.release()
