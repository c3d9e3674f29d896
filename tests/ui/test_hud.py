from __future__ import annotations

import pytest

from engine.core.animation import AnimationLoop
from engine.ui.hud.config import HUDConfig
from engine.ui.hud.status import format_status


def test_format_status_reports_state(loop: AnimationLoop) -> None:
    loop.dispatch("increase")
    text = format_status(loop, 59.94)
    assert "FPS  59.9" in text
    assert f"POINTS {len(loop.grid)}" in text
    assert "ALT +0.50" in text
    assert "CARNAGE" not in text
    loop.dispatch("carnage")
    assert format_status(loop, 60.0).endswith("CARNAGE")


def test_hud_config_from_mapping() -> None:
    conf = HUDConfig.from_mapping({"enabled": True, "text_color": "#ff000080", "font_size": 12})
    assert conf.enabled is True
    assert conf.font_size == 12
    assert conf.text_color == (255, 0, 0, 128)
    # 明示指定は設定より優先
    assert HUDConfig.from_mapping({"enabled": True}, enabled=False).enabled is False
    assert HUDConfig.from_mapping(None).enabled is False


def test_hud_config_rejects_bad_smoothing() -> None:
    with pytest.raises(ValueError):
        HUDConfig.from_mapping({"smoothing_alpha": 0.0})
