from __future__ import annotations

from api import Constants, run

if __name__ == "__main__":
    # 描画面は起動時の画面サイズ（config.yaml の canvas.width/height で固定も可）
    run(
        constants=Constants(count=125, blur=0.1, point_width=20, point_height=20),
        fps=60,
        use_controls=True,
    )
