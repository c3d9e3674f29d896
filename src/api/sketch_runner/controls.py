"""
どこで: `api.sketch_runner.controls`
何を: 操作ウィンドウ（Dear PyGui）の初期化と、失敗時のフォールバック。
なぜ: `api.sketch` から初期化責務を分離し、GUI 非対応環境でもキー操作だけで続行できるようにするため。
"""

from __future__ import annotations

import logging
from typing import Any

from engine.ui.controls.panel import ControlPanel

logger = logging.getLogger(__name__)


class _NullControlWindow:
    def close(self) -> None:
        return None

    def set_visible(self, _visible: bool) -> None:
        return None


def setup_control_window(panel: ControlPanel, use_controls: bool) -> Any:
    """操作ウィンドウを生成して返す。

    - `use_controls` が False の場合は Null 実装を返す。
    - 依存未導入/表示不可の環境では WARNING を出して Null へフォールバックする。
    """
    if not use_controls:
        return _NullControlWindow()
    try:
        # 遅延インポート（依存未導入環境でもフォールバック可能に）
        from engine.ui.controls.dpg_window import ControlWindow

        return ControlWindow(panel)
    except Exception as e:  # ImportError / DPG 初期化失敗など
        logger.warning("control window unavailable; keyboard controls only: %s", e)
        return _NullControlWindow()


__all__ = ["setup_control_window"]
