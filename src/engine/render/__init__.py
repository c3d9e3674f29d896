"""
どこで: `engine.render` サブパッケージ。
何を: 描画面（PaintSurface）・点群の描画命令化（GridRenderer）・GPU 合成/提示（SurfaceRenderer）。
なぜ: 状態更新（core）と描画の責務を分離し、GPU リソース管理を局所化するため。
"""

from .grid import GridRenderer
from .surface import PaintSurface

__all__ = ["GridRenderer", "PaintSurface"]
