"""
どこで: `engine.ui.controls.panel`。
何を: 2 つのボタン群（最初の選択前/後）の表示状態とボタン表記を持ち、押下をイベントとして配送する。
なぜ: 表示切替やトグル表記といった見た目の規則を GUI 実装から切り離し、テスト可能にするため。

規則:
- 初期状態は「前」群（増/減）のみ表示。増/減で「前」を隠し「後」群（反転/一時停止/カーネージ/再スタート）を表示。
- 再スタートで「前」を再表示し「後」を隠す。
- 非表示の群のボタンは押せない（無視して DEBUG ログ）。
- 反転/一時停止のボタン表記は押すたびに切り替わり、再スタートでは戻さない。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from engine.core.state import ControlEvent

logger = logging.getLogger(__name__)


class ButtonGroup(str, Enum):
    FIRST = "first"
    SECOND = "second"


BUTTON_GROUPS: dict[ControlEvent, ButtonGroup] = {
    ControlEvent.INCREASE: ButtonGroup.FIRST,
    ControlEvent.DECREASE: ButtonGroup.FIRST,
    ControlEvent.REVERSE: ButtonGroup.SECOND,
    ControlEvent.PAUSE: ButtonGroup.SECOND,
    ControlEvent.CARNAGE: ButtonGroup.SECOND,
    ControlEvent.RESTART: ButtonGroup.SECOND,
}

# 押下ごとに循環する表記
BUTTON_LABELS: dict[ControlEvent, tuple[str, ...]] = {
    ControlEvent.INCREASE: ("+",),
    ControlEvent.DECREASE: ("-",),
    ControlEvent.REVERSE: (">>", "<<"),
    ControlEvent.PAUSE: ("||", "|>"),
    ControlEvent.CARNAGE: ("carnage",),
    ControlEvent.RESTART: ("restart",),
}

PanelListener = Callable[["ControlPanel"], None]


class ControlPanel:
    """ボタン群の表示状態と表記を管理し、押下を `dispatch` へ渡す。"""

    def __init__(self, dispatch: Callable[[ControlEvent], None]) -> None:
        self._dispatch = dispatch
        self._visible: dict[ButtonGroup, bool] = {
            ButtonGroup.FIRST: True,
            ButtonGroup.SECOND: False,
        }
        self._presses: dict[ControlEvent, int] = {ev: 0 for ev in ControlEvent}
        self._listeners: list[PanelListener] = []

    # ---- 参照 ----
    def is_visible(self, group: ButtonGroup | str) -> bool:
        return self._visible[ButtonGroup(group)]

    def is_enabled(self, event: ControlEvent | str) -> bool:
        return self.is_visible(BUTTON_GROUPS[ControlEvent(event)])

    def label(self, event: ControlEvent | str) -> str:
        ev = ControlEvent(event)
        labels = BUTTON_LABELS[ev]
        return labels[self._presses[ev] % len(labels)]

    def buttons(self, group: ButtonGroup | str) -> list[ControlEvent]:
        g = ButtonGroup(group)
        return [ev for ev, owner in BUTTON_GROUPS.items() if owner is g]

    # ---- 購読 ----
    def subscribe(self, listener: PanelListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: PanelListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # ---- 押下 ----
    def activate(self, event: ControlEvent | str) -> bool:
        """ボタンを押す。押せた場合 True（非表示の群なら False）。"""
        ev = ControlEvent(event)
        if not self.is_enabled(ev):
            logger.debug("ignored %s: button group %s is hidden", ev.value, BUTTON_GROUPS[ev].value)
            return False
        self._presses[ev] += 1
        self._dispatch(ev)
        if ev in (ControlEvent.INCREASE, ControlEvent.DECREASE):
            self._show_first(False)
        elif ev is ControlEvent.RESTART:
            self._show_first(True)
        for listener in list(self._listeners):
            listener(self)
        return True

    def _show_first(self, first: bool) -> None:
        self._visible[ButtonGroup.FIRST] = first
        self._visible[ButtonGroup.SECOND] = not first


__all__ = ["ButtonGroup", "ControlPanel", "BUTTON_GROUPS", "BUTTON_LABELS"]
