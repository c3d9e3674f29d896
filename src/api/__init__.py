"""
どこで: `api` 入口（高レベル公開 API）。
何を: 実行関数 `run_sketch`（別名 `run`）と、描画定数・操作イベントの型を再輸出。
なぜ: 利用者が単一名前空間から定数の調整→実行まで完結できるようにするため。

Usage:
    from api import Constants, run

    run(constants=Constants(count=24, point_width=3.0, point_height=3.0), fps=30)
"""

from engine.core.state import Constants, ControlEvent

from .sketch import run_sketch as run
from .sketch import run_sketch as run_sketch

__all__ = [
    "run_sketch",  # 実行（詳細指定）
    "run",  # 実行（エイリアス、簡易）
    "Constants",
    "ControlEvent",
]

# バージョン情報
__version__ = "2026.10"
