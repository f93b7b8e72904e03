"""Instanced drawing of the block world."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from ..world import Block
from .instance_buffer import INSTANCE_STRIDE, TEX_INDEX_OFFSET, BlockInstance, InstanceVBO
from .mesh import UV_OFFSET, VERTEX_STRIDE, CubeMesh
from .shader import ShaderProgram, gl


def build_instances(blocks: Iterable[Block]) -> list[BlockInstance]:
    """One instance per block, positioned at its centre and textured by its id."""
    return [
        BlockInstance(pos=tuple(float(c) for c in block.pos), tex_index=int(block.id))
        for block in blocks
    ]


class Renderer:
    """Draws many copies of a cube mesh with one shader program."""

    def __init__(self, vert_src: str, frag_src: str, mesh: CubeMesh) -> None:
        self.shader = ShaderProgram(vert_src, frag_src)
        self._mesh = mesh
        self._u_vp = self.shader.uniform_location("uVP")
        self._instances: list[BlockInstance] = []

    def draw(self, vp, instance_count: int) -> None:
        """Draw ``instance_count`` cubes with view-projection matrix ``vp`` (row-major)."""
        self.shader.use()
        column_major = np.asarray(vp, dtype=np.float32).flatten(order="F")
        matrix = (gl.GLfloat * 16)(*column_major.tolist())
        gl.glUniformMatrix4fv(self._u_vp, 1, gl.GL_FALSE, matrix)
        gl.glBindVertexArray(self._mesh.vao)
        gl.glDrawElementsInstanced(
            gl.GL_TRIANGLES, self._mesh.index_count, gl.GL_UNSIGNED_INT, None, instance_count
        )
        gl.glBindVertexArray(0)

    def build_instance_buffer(self, blocks: Iterable[Block], instance_vbo: InstanceVBO) -> None:
        """Rebuild instance data from ``blocks`` and upload it."""
        self._instances = build_instances(blocks)
        instance_vbo.update(self._instances)

    def setup_attributes(self, cube: CubeMesh, inst: InstanceVBO) -> None:
        """Wire cube vertex data and per-instance data into the cube's vertex array."""
        gl.glBindVertexArray(cube.vao)

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, cube.vbo)
        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 3, gl.GL_FLOAT, gl.GL_FALSE, VERTEX_STRIDE, 0)
        gl.glEnableVertexAttribArray(2)
        gl.glVertexAttribPointer(2, 2, gl.GL_FLOAT, gl.GL_FALSE, VERTEX_STRIDE, UV_OFFSET)

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, inst.id)
        gl.glEnableVertexAttribArray(1)
        gl.glVertexAttribPointer(1, 3, gl.GL_FLOAT, gl.GL_FALSE, INSTANCE_STRIDE, 0)
        gl.glVertexAttribDivisor(1, 1)

        gl.glEnableVertexAttribArray(3)
        gl.glVertexAttribIPointer(3, 1, gl.GL_INT, INSTANCE_STRIDE, TEX_INDEX_OFFSET)
        gl.glVertexAttribDivisor(3, 1)

        gl.glBindVertexArray(0)