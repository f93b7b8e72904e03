import struct

import pytest

from tinycraft.gfx import instance_buffer as ib_module
from tinycraft.gfx import shader as shader_module
from tinycraft.gfx.instance_buffer import (
    INSTANCE_STRIDE,
    TEX_INDEX_OFFSET,
    BlockInstance,
    InstanceVBO,
    pack_instances,
)


class Box:
    def __init__(self, value=0):
        self.value = value


class FakeGL:
    GLuint = Box

    def __init__(self):
        self.calls = []
        self._next = 0

    def __getattr__(self, name):
        if name.startswith("GL_"):
            return name

        def record(*args):
            self.calls.append((name, args))

        return record

    def named(self, name):
        return [args for call, args in self.calls if call == name]

    def glGenBuffers(self, n, ref):
        self._next += 1
        ref.value = self._next

    def glDeleteBuffers(self, n, ref):
        self.calls.append(("glDeleteBuffers", (ref.value,)))


@pytest.fixture
def fake(monkeypatch):
    gl = FakeGL()
    monkeypatch.setattr(ib_module, "gl", gl)
    monkeypatch.setattr(shader_module, "gl", gl)
    return gl


def test_record_layout_is_sixteen_bytes():
    assert INSTANCE_STRIDE == 16
    assert len(pack_instances([BlockInstance((1.0, 2.0, 3.0), 2)])) == INSTANCE_STRIDE


def test_pack_round_trip():
    instances = [BlockInstance((1.0, -2.0, 3.5), 1), BlockInstance((0.0, 4.0, -8.0), 2)]
    data = pack_instances(instances)
    unpacked = [struct.unpack_from("<3fi", data, offset) for offset in range(0, len(data), INSTANCE_STRIDE)]
    assert unpacked == [(1.0, -2.0, 3.5, 1), (0.0, 4.0, -8.0, 2)]


def test_tex_index_sits_after_position():
    data = pack_instances([BlockInstance((0.0, 0.0, 0.0), 2)])
    assert struct.unpack_from("<i", data, TEX_INDEX_OFFSET) == (2,)


def test_pack_empty():
    assert pack_instances([]) == b""


def test_update_uploads_packed_data(fake):
    vbo = InstanceVBO()
    instances = [BlockInstance((1.0, 2.0, 3.0), 0)]
    vbo.update(instances)
    assert fake.named("glBindBuffer") == [("GL_ARRAY_BUFFER", vbo.id)]
    data = pack_instances(instances)
    assert fake.named("glBufferData") == [("GL_ARRAY_BUFFER", len(data), data, "GL_STATIC_DRAW")]


def test_update_with_no_instances(fake):
    vbo = InstanceVBO()
    vbo.update([])
    assert vbo.id == 1
    assert fake.named("glBindBuffer") == [("GL_ARRAY_BUFFER", vbo.id)]
    assert fake.named("glBufferData") == [("GL_ARRAY_BUFFER", 0, None, "GL_STATIC_DRAW")]


def test_delete_once(fake):
    vbo = InstanceVBO()
    name = vbo.id
    vbo.delete()
    vbo.delete()
    assert fake.named("glDeleteBuffers") == [(name,)]
    assert vbo.id == 0