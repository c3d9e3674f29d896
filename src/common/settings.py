"""
どこで: `common.settings`
何を: noisegrid の環境変数（`NGR_*`）を型付きで一元管理し、起動時に読み込む。
なぜ: YAML 設定より優先される一時的な上書き（グリッド解像度/シード/ログ）を一箇所で扱うため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # グリッド解像度の上書き（None なら YAML/既定値）
    GRID_COUNT: int | None = None
    # 乱数シード固定（None なら毎回ランダム）
    SEED: int | None = None

    # ログ
    LOG_LEVEL: str = "INFO"

    # フロントエンド
    CONTROLS_ENABLED: bool = True
    HUD_ENABLED: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - `NGR_GRID_COUNT` は 1 未満を 1 に丸める。
    - `NGR_SEED` は負値も許容（`AnimationLoop` が 64bit に畳み込む）。
    """
    _settings.GRID_COUNT = env_int("NGR_GRID_COUNT", None, min_value=1)
    _settings.SEED = env_int("NGR_SEED", None)
    _settings.LOG_LEVEL = (env_str("NGR_LOG_LEVEL", "INFO") or "INFO").upper()
    _settings.CONTROLS_ENABLED = env_bool("NGR_CONTROLS_ENABLED", True)
    _settings.HUD_ENABLED = env_bool("NGR_HUD_ENABLED", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
