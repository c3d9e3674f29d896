from __future__ import annotations

import numpy as np
import pytest

from engine.render.mesh import TriangleMesh
from engine.render.surface import FLOATS_PER_VERTEX, VERTICES_PER_RECT, PaintSurface

mgl = pytest.importorskip("moderngl")

from engine.render.renderer import SurfaceRenderer  # noqa: E402


class _DummyBuffer:
    def __init__(self, reserve: int) -> None:
        self.size = reserve
        self.orphaned = 0
        self.written: list[bytes] = []
        self.released = False

    def orphan(self) -> None:
        self.orphaned += 1

    def write(self, data: bytes) -> None:
        self.written.append(data)

    def release(self) -> None:
        self.released = True


class _DummyVAO:
    def __init__(self, buffer: _DummyBuffer) -> None:
        self.buffer = buffer
        self.render_calls: list[tuple[int, int]] = []
        self.released = False

    def render(self, mode: int, vertices: int) -> None:
        self.render_calls.append((mode, vertices))

    def release(self) -> None:
        self.released = True


class _DummyCtx:
    def __init__(self) -> None:
        self.buffers: list[_DummyBuffer] = []
        self.vaos: list[_DummyVAO] = []

    def buffer(self, reserve: int, dynamic: bool = False) -> _DummyBuffer:
        buf = _DummyBuffer(reserve)
        self.buffers.append(buf)
        return buf

    def vertex_array(self, program, content) -> _DummyVAO:  # noqa: ANN001
        vao = _DummyVAO(content[0][0])
        self.vaos.append(vao)
        return vao


def _vertices(rects: int) -> np.ndarray:
    return np.ones((rects * VERTICES_PER_RECT, FLOATS_PER_VERTEX), dtype=np.float32)


def test_upload_writes_within_reserve() -> None:
    ctx = _DummyCtx()
    mesh = TriangleMesh(ctx, program=object(), initial_reserve=1024)
    verts = _vertices(2)
    mesh.upload(verts)
    assert len(ctx.buffers) == 1
    assert mesh.vbo.orphaned == 1
    assert mesh.vbo.written == [verts.tobytes()]
    assert mesh.vertex_count == 12
    mesh.render(4)
    assert mesh.vao.render_calls == [(4, 12)]


def test_upload_grows_buffer_and_rebuilds_vao() -> None:
    ctx = _DummyCtx()
    mesh = TriangleMesh(ctx, program=object(), initial_reserve=256)
    old_vbo, old_vao = mesh.vbo, mesh.vao
    verts = _vertices(2)  # 12 * 6 * 4 = 288 bytes
    mesh.upload(verts)
    assert old_vbo.released and old_vao.released
    assert mesh.vbo is not old_vbo
    assert mesh.vbo.size == max(verts.nbytes, 512)
    assert mesh.vao.buffer is mesh.vbo
    # 余裕があれば再確保しない
    mesh.upload(_vertices(1))
    assert len(ctx.buffers) == 2


def test_upload_rejects_bad_shape() -> None:
    mesh = TriangleMesh(_DummyCtx(), program=object(), initial_reserve=256)
    with pytest.raises(ValueError):
        mesh.upload(np.zeros((4, 3), dtype=np.float32))


def test_render_skips_empty_mesh() -> None:
    mesh = TriangleMesh(_DummyCtx(), program=object(), initial_reserve=256)
    mesh.render(4)
    assert mesh.vao.render_calls == []


class _DummyMesh:
    def __init__(self) -> None:
        self.uploads: list[np.ndarray] = []
        self.renders: list[int] = []

    def upload(self, vertices: np.ndarray) -> None:
        self.uploads.append(vertices)

    def render(self, mode: int) -> None:
        self.renders.append(mode)


class _DummyTarget:
    def __init__(self) -> None:
        self.used = 0

    def use(self) -> None:
        self.used += 1


class _DummyGLContext:
    def __init__(self) -> None:
        self.screen = _DummyTarget()
        self.enabled: list[int] = []
        self.blend_func = None

    def enable(self, flag: int) -> None:
        self.enabled.append(flag)


def _make_renderer(surface: PaintSurface) -> tuple[SurfaceRenderer, _DummyMesh, _DummyGLContext]:
    # __init__ を通さず、tick に必要な属性だけを手動で設定する
    renderer = SurfaceRenderer.__new__(SurfaceRenderer)
    mesh = _DummyMesh()
    ctx = _DummyGLContext()
    renderer.ctx = ctx
    renderer.surface = surface
    renderer.mesh = mesh  # type: ignore[assignment]
    renderer.fbo = _DummyTarget()
    renderer._last_rect_count = 0
    return renderer, mesh, ctx


def test_tick_skips_upload_for_empty_batch(surface: PaintSurface) -> None:
    renderer, mesh, ctx = _make_renderer(surface)
    renderer.tick(1 / 60)
    assert mesh.uploads == [] and mesh.renders == []
    assert renderer.fbo.used == 0
    assert renderer.get_last_rect_count() == 0


def test_tick_composites_batch_into_fbo(surface: PaintSurface) -> None:
    renderer, mesh, ctx = _make_renderer(surface)
    surface.fill_rect(0, 0, 10, 10)
    surface.fill_all("rgba(255, 255, 255, 0.1)")
    renderer.tick(1 / 60)
    assert len(mesh.uploads) == 1
    assert mesh.uploads[0].shape == (2 * VERTICES_PER_RECT, FLOATS_PER_VERTEX)
    assert mesh.renders == [mgl.TRIANGLES]
    assert renderer.get_last_rect_count() == 2
    assert renderer.fbo.used == 1 and ctx.screen.used == 1
    assert ctx.blend_func == (mgl.SRC_ALPHA, mgl.ONE_MINUS_SRC_ALPHA, mgl.ONE, mgl.ONE_MINUS_SRC_ALPHA)
    # バッチは消費済み
    assert surface.pending_rects == 0
