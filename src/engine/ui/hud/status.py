"""
どこで: `engine.ui.hud.status`。
何を: HUD に出す状態行（FPS/点数/変位量/アルファ/カーネージ）の文字列化。
なぜ: 表示（pyglet）から切り離し、ウィンドウ無しで検証できるようにするため。
"""

from __future__ import annotations

from engine.core.animation import AnimationLoop


def format_status(loop: AnimationLoop, fps: float) -> str:
    """HUD の表示文字列（1 行）を作る。"""
    ctl = loop.control
    parts = [
        f"FPS {fps:5.1f}",
        f"POINTS {len(loop.grid)}",
        f"ALT {ctl.alteration:+.2f}",
        f"ALPHA {ctl.alpha:.2f}",
    ]
    if ctl.carnage:
        parts.append("CARNAGE")
    return "  ".join(parts)


__all__ = ["format_status"]
