"""
どこで: `engine.ui.controls.keymap`。
何を: 描画ウィンドウのキー名（pyglet の `symbol_string`）→ 操作イベントの対応表。
なぜ: 操作ウィンドウ無しでも同じ操作をキーボードから行えるようにするため。
"""

from __future__ import annotations

from typing import Mapping

from engine.core.state import ControlEvent

DEFAULT_KEYMAP: Mapping[str, ControlEvent] = {
    "UP": ControlEvent.INCREASE,
    "DOWN": ControlEvent.DECREASE,
    "R": ControlEvent.REVERSE,
    "SPACE": ControlEvent.PAUSE,
    "C": ControlEvent.CARNAGE,
    "BACKSPACE": ControlEvent.RESTART,
}


def event_for_key(
    symbol_name: str, keymap: Mapping[str, ControlEvent] = DEFAULT_KEYMAP
) -> ControlEvent | None:
    """キー名に対応するイベント（無ければ None）。大文字/小文字は不問。"""
    return keymap.get(symbol_name.strip().upper())


__all__ = ["DEFAULT_KEYMAP", "event_for_key"]
