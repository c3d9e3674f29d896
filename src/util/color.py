"""
どこで: `util.color`。
何を: CSS 風の色文字列（`hsl(...)`/`rgba(...)`/Hex）の生成と RGBA(0–1) への正規化。
なぜ: 描画側は色を文字列で受け取り、GPU へは 0–1 の float で渡すため、その変換を一元化する。
"""

from __future__ import annotations

import colorsys
import re
from typing import Sequence

RGBA = tuple[float, float, float, float]

_FUNC_RE = re.compile(r"^\s*(hsla?|rgba?)\s*\(\s*(.*?)\s*\)\s*$", re.IGNORECASE)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def hsla(h: float, s: float, l: float, a: float) -> str:
    """`hsl(h, s%, l%, a)` 形式の文字列を返す（h は無制限、折り返しは解釈側）。"""
    return f"hsl({h}, {s}%, {l}%, {a})"


def rgba(r: float, g: float, b: float, a: float) -> str:
    """`rgba(r, g, b, a)` 形式の文字列を返す（r/g/b は 0–255、a は 0–1）。"""
    return f"rgba({r}, {g}, {b}, {a})"


def lerp(v0: float, v1: float, t: float) -> float:
    """`v0`→`v1` を `t` で線形補間する（t は範囲外も許容）。"""
    return v0 * (1 - t) + v1 * t


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def _number(token: str, *, percent: bool, src: str) -> float:
    t = token.strip()
    if percent:
        if not t.endswith("%"):
            raise ValueError(f"expected percentage in color: '{src}'")
        t = t[:-1]
    try:
        return float(t)
    except ValueError as e:
        raise ValueError(f"invalid number '{token}' in color: '{src}'") from e


def parse_css_color(s: str) -> RGBA:
    """`hsl()/hsla()/rgb()/rgba()` またはHex文字列を RGBA(0–1) に変換する。

    - hsl の色相は 360 で折り返す（負値も可）。彩度/明度/アルファは 0–1 にクランプ。
    - rgb の各成分は 0–255 とみなしてスケールする。
    - アルファ省略時は 1.0。
    """
    m = _FUNC_RE.match(s)
    if m is None:
        if "(" in s:
            raise ValueError(f"unsupported color: '{s}'")
        return parse_hex_color_str(s)
    func = m.group(1).lower()
    parts = [p for p in m.group(2).split(",")]
    if len(parts) not in (3, 4):
        raise ValueError(f"color needs 3 or 4 components: '{s}'")
    a = _clamp01(_number(parts[3], percent=False, src=s)) if len(parts) == 4 else 1.0
    if func.startswith("hsl"):
        h = _number(parts[0], percent=False, src=s) % 360.0
        sat = _clamp01(_number(parts[1], percent=True, src=s) / 100.0)
        light = _clamp01(_number(parts[2], percent=True, src=s) / 100.0)
        r, g, b = colorsys.hls_to_rgb(h / 360.0, light, sat)
        return (_clamp01(r), _clamp01(g), _clamp01(b), a)
    r, g, b = (_clamp01(_number(p, percent=False, src=s) / 255.0) for p in parts[:3])
    return (r, g, b, a)


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 受理: CSS 色文字列/Hex 文字列, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return parse_css_color(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[float] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        vals = [float(v) for v in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(vals) == 3:
        vals.append(1.0)
    if all(0.0 <= v <= 1.0 for v in vals):
        return (vals[0], vals[1], vals[2], vals[3])
    # 0–255 とみなす（アルファ省略時は不透明）
    a = vals[3] if len(seq) == 4 else 255.0
    r, g, b = (max(0, min(255, int(round(v)))) for v in vals[:3])
    a8 = max(0, min(255, int(round(a))))
    return (r / 255.0, g / 255.0, b / 255.0, a8 / 255.0)


__all__ = [
    "RGBA",
    "hsla",
    "rgba",
    "lerp",
    "parse_hex_color_str",
    "parse_css_color",
    "normalize_color",
]
