"""
どこで: `engine.render.shader`。
何を: 描画面の塗り（頂点色の三角形）と画面への提示（テクスチャ全面矩形）の GLSL プログラムを生成。
なぜ: シェーダ文字列を Renderer から分離し、GL 初期化の責務を小さく保つため。
"""

from __future__ import annotations

from typing import Any

PAINT_VERTEX = """
#version 330
uniform mat4 projection;
in vec2 in_pos;
in vec4 in_color;
out vec4 v_color;
void main() {
    v_color = in_color;
    gl_Position = projection * vec4(in_pos, 0.0, 1.0);
}
"""

PAINT_FRAGMENT = """
#version 330
in vec4 v_color;
out vec4 f_color;
void main() {
    f_color = v_color;
}
"""

PRESENT_VERTEX = """
#version 330
in vec2 in_pos;
in vec2 in_uv;
out vec2 v_uv;
void main() {
    v_uv = in_uv;
    gl_Position = vec4(in_pos, 0.0, 1.0);
}
"""

PRESENT_FRAGMENT = """
#version 330
uniform sampler2D surface;
in vec2 v_uv;
out vec4 f_color;
void main() {
    f_color = texture(surface, v_uv);
}
"""


class Shader:
    @staticmethod
    def create_paint_program(ctx: Any) -> Any:
        """頂点色で三角形を塗るプログラム（`projection` はキャンバス px → クリップ空間）。"""
        return ctx.program(vertex_shader=PAINT_VERTEX, fragment_shader=PAINT_FRAGMENT)

    @staticmethod
    def create_present_program(ctx: Any) -> Any:
        """オフスクリーン面のテクスチャを全画面に貼るプログラム。"""
        return ctx.program(vertex_shader=PRESENT_VERTEX, fragment_shader=PRESENT_FRAGMENT)


__all__ = ["Shader"]
