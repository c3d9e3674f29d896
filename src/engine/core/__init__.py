"""
どこで: `engine.core` サブパッケージ。
何を: フレーム駆動（Tickable/FrameClock）・描画ウィンドウ・ノイズ・点群と操作状態・アニメーションループ。
なぜ: 描画（render）と UI（ui）から独立した状態遷移の基盤を提供するため。
"""
