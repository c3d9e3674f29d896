"""
どこで: `common` パッケージ。
何を: ロギング/環境変数/設定スナップショットなど、エンジンと API の双方で使う軽量基盤。
なぜ: 依存の向きを「api → engine → common/util」に揃え、循環を避けるため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
