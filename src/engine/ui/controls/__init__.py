"""
どこで: `engine.ui.controls` パッケージ。
何を: 操作ボタン群のモデル（ControlPanel）・キー割り当て・Dear PyGui の操作ウィンドウ。
なぜ: 入力手段（ボタン/キー）に依らず、同じ規則でイベントを AnimationLoop へ届けるため。
"""

from .keymap import DEFAULT_KEYMAP, event_for_key
from .panel import ButtonGroup, ControlPanel

__all__ = ["ButtonGroup", "ControlPanel", "DEFAULT_KEYMAP", "event_for_key"]
