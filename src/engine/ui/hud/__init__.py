"""
どこで: `engine.ui.hud` パッケージ。
何を: 実行状態（FPS/点数/変位量/カーネージ）のオーバーレイ表示。
なぜ: 操作の効き具合を描画ウィンドウ上で即座に確認できるようにするため。
"""

from .config import HUDConfig
from .status import format_status

__all__ = ["HUDConfig", "format_status"]
