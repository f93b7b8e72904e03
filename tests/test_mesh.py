import numpy as np
import pytest

from tinycraft.gfx import mesh as mesh_module
from tinycraft.gfx import shader as shader_module
from tinycraft.gfx.mesh import CubeMesh, cube_geometry


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

    def _gen(self, name, n, ref):
        self._next += 1
        ref.value = self._next
        self.calls.append((name, (ref.value,)))

    def glGenBuffers(self, n, ref):
        self._gen("glGenBuffers", n, ref)

    def glGenVertexArrays(self, n, ref):
        self._gen("glGenVertexArrays", n, ref)

    def glDeleteBuffers(self, n, ref):
        self.calls.append(("glDeleteBuffers", (ref.value,)))

    def glDeleteVertexArrays(self, n, ref):
        self.calls.append(("glDeleteVertexArrays", (ref.value,)))


@pytest.fixture
def fake(monkeypatch):
    gl = FakeGL()
    monkeypatch.setattr(mesh_module, "gl", gl)
    monkeypatch.setattr(shader_module, "gl", gl)
    return gl


def test_geometry_shapes():
    vertices, indices = cube_geometry()
    assert vertices.shape == (24, 5)
    assert vertices.dtype == np.float32
    assert indices.shape == (36,)


def test_positions_are_cube_corners():
    vertices, _ = cube_geometry()
    assert set(np.abs(vertices[:, :3]).ravel().tolist()) == {0.5}
    assert set(vertices[:, 3:].ravel().tolist()) == {0.0, 1.0}


def test_each_face_is_planar():
    vertices, _ = cube_geometry()
    for face in vertices[:, :3].reshape(6, 4, 3):
        spans = face.max(axis=0) - face.min(axis=0)
        assert int(np.count_nonzero(spans == 0)) == 1


def test_indices_stay_within_their_face():
    _, indices = cube_geometry()
    faces = indices.reshape(6, 6) // 4
    assert (faces == np.arange(6)[:, None]).all()


def test_triangles_wind_outwards():
    vertices, indices = cube_geometry()
    positions = vertices[:, :3].astype(float)
    for a, b, c in indices.reshape(-1, 3):
        pa, pb, pc = positions[a], positions[b], positions[c]
        normal = np.cross(pb - pa, pc - pa)
        centroid = (pa + pb + pc) / 3
        assert float(np.dot(normal, centroid)) > 0


def test_mesh_uploads_geometry(fake):
    mesh = CubeMesh()
    vertices, indices = cube_geometry()
    uploads = fake.named("glBufferData")
    assert uploads[0] == ("GL_ARRAY_BUFFER", vertices.nbytes, vertices.tobytes(), "GL_STATIC_DRAW")
    assert uploads[1] == ("GL_ELEMENT_ARRAY_BUFFER", indices.nbytes, indices.tobytes(), "GL_STATIC_DRAW")
    assert mesh.index_count == len(indices)
    assert len({mesh.vao, mesh.vbo, mesh.ebo}) == 3


def test_mesh_position_attribute(fake):
    mesh = CubeMesh()
    (args,) = fake.named("glVertexAttribPointer")
    assert args == (0, 3, "GL_FLOAT", "GL_FALSE", mesh_module.VERTEX_STRIDE, 0)
    assert fake.named("glBindVertexArray") == [(mesh.vao,), (0,)]


def test_delete_releases_everything_once(fake):
    mesh = CubeMesh()
    names = (mesh.vao, mesh.vbo, mesh.ebo)
    mesh.delete()
    mesh.delete()
    assert sorted(a[0] for a in fake.named("glDeleteBuffers")) == sorted(names[1:])
    assert fake.named("glDeleteVertexArrays") == [(names[0],)]
    assert (mesh.vao, mesh.vbo, mesh.ebo) == (0, 0, 0)