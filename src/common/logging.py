"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- ランナー/CLI はハンドラ未設定時に限り、最小構成を 1 度だけ適用する。
"""

from __future__ import annotations

import logging


def resolve_level(level: int | str) -> int:
    """レベル指定（名前または数値）を `logging` の数値レベルへ解決する。"""
    if isinstance(level, str):
        lvl = getattr(logging, level.strip().upper(), None)
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str = "INFO") -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - 上位のランナー/CLI から呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


__all__ = ["resolve_level", "setup_default_logging"]
