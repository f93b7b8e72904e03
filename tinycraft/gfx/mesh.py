"""Unit cube geometry and its GPU buffers."""

from __future__ import annotations

import numpy as np

from .shader import _delete_name, _gen_name, gl

FLOAT_SIZE = 4
VERTEX_STRIDE = 5 * FLOAT_SIZE
UV_OFFSET = 3 * FLOAT_SIZE

# x, y, z, u, v per vertex; four vertices per face.
_VERTICES = [
    # front (z = +0.5)
    (-0.5, -0.5, 0.5, 0.0, 0.0),
    (0.5, -0.5, 0.5, 1.0, 0.0),
    (0.5, 0.5, 0.5, 1.0, 1.0),
    (-0.5, 0.5, 0.5, 0.0, 1.0),
    # right (x = +0.5)
    (0.5, -0.5, 0.5, 0.0, 0.0),
    (0.5, -0.5, -0.5, 1.0, 0.0),
    (0.5, 0.5, -0.5, 1.0, 1.0),
    (0.5, 0.5, 0.5, 0.0, 1.0),
    # back (z = -0.5)
    (0.5, -0.5, -0.5, 0.0, 0.0),
    (-0.5, -0.5, -0.5, 1.0, 0.0),
    (-0.5, 0.5, -0.5, 1.0, 1.0),
    (0.5, 0.5, -0.5, 0.0, 1.0),
    # left (x = -0.5)
    (-0.5, -0.5, -0.5, 0.0, 0.0),
    (-0.5, -0.5, 0.5, 1.0, 0.0),
    (-0.5, 0.5, 0.5, 1.0, 1.0),
    (-0.5, 0.5, -0.5, 0.0, 1.0),
    # top (y = +0.5)
    (-0.5, 0.5, 0.5, 0.0, 0.0),
    (0.5, 0.5, 0.5, 1.0, 0.0),
    (0.5, 0.5, -0.5, 1.0, 1.0),
    (-0.5, 0.5, -0.5, 0.0, 1.0),
    # bottom (y = -0.5)
    (-0.5, -0.5, -0.5, 0.0, 0.0),
    (0.5, -0.5, -0.5, 1.0, 0.0),
    (0.5, -0.5, 0.5, 1.0, 1.0),
    (-0.5, -0.5, 0.5, 0.0, 1.0),
]

_FACE_INDICES = (0, 1, 2, 2, 3, 0)


def cube_geometry() -> tuple[np.ndarray, np.ndarray]:
    """Vertices (float32, N x 5) and triangle indices (uint32) of a unit cube."""
    vertices = np.array(_VERTICES, dtype=np.float32)
    indices = np.array(
        [base + i for base in range(0, len(_VERTICES), 4) for i in _FACE_INDICES],
        dtype=np.uint32,
    )
    return vertices, indices


class CubeMesh:
    """Vertex array, vertex buffer and index buffer holding the cube."""

    def __init__(self) -> None:
        vertices, indices = cube_geometry()
        self.vao = _gen_name(gl.glGenVertexArrays)
        gl.glBindVertexArray(self.vao)
        self.vbo = _gen_name(gl.glGenBuffers)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, vertices.nbytes, vertices.tobytes(), gl.GL_STATIC_DRAW)
        self.ebo = _gen_name(gl.glGenBuffers)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self.ebo)
        gl.glBufferData(gl.GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices.tobytes(), gl.GL_STATIC_DRAW)
        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 3, gl.GL_FLOAT, gl.GL_FALSE, VERTEX_STRIDE, 0)
        self.index_count = int(indices.size)
        gl.glBindVertexArray(0)

    def delete(self) -> None:
        """Release the GL objects; further calls do nothing."""
        for attr in ("ebo", "vbo"):
            name = getattr(self, attr)
            if name:
                _delete_name(gl.glDeleteBuffers, name)
                setattr(self, attr, 0)
        if self.vao:
            _delete_name(gl.glDeleteVertexArrays, self.vao)
            self.vao = 0