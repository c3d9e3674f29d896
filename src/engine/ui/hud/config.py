"""
どこで: `engine.ui.hud.config`。
何を: HUD 表示の設定（有効/無効・文字色・平滑化係数）を定義する。
なぜ: HUD の表示を宣言的に制御し、不要時は生成自体を省くため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class HUDConfig:
    """HUD の表示設定。

    Parameters
    ----------
    enabled : bool
        HUD 全体の有効/無効。
    font_size : int
        文字サイズ [pt]。
    text_color : tuple[int, int, int, int]
        文字色 RGBA（0..255）。
    smoothing_alpha : float
        FPS の EMA 平滑化係数（0..1, 大きいほど追従）。
    """

    enabled: bool = False
    font_size: int = 9
    text_color: tuple[int, int, int, int] = (0, 0, 0, 180)
    smoothing_alpha: float = 0.1

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, *, enabled: bool | None = None) -> "HUDConfig":
        """YAML の `hud` セクションから生成する（`enabled` 明示は設定より優先）。"""
        from util.color import normalize_color

        d = dict(data or {})
        base = cls()
        color = base.text_color
        if d.get("text_color") is not None:
            r, g, b, a = normalize_color(d["text_color"])
            color = (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))
        alpha = float(d.get("smoothing_alpha", base.smoothing_alpha))
        if not (0.0 < alpha <= 1.0):
            raise ValueError(f"hud.smoothing_alpha must be within (0, 1], got {alpha}")
        return cls(
            enabled=bool(d.get("enabled", base.enabled)) if enabled is None else bool(enabled),
            font_size=int(d.get("font_size", base.font_size)),
            text_color=color,
            smoothing_alpha=alpha,
        )
