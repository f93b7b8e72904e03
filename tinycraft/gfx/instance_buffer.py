"""Per-instance block data and the GPU buffer that holds it."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass

from .shader import _delete_name, _gen_name, gl

_INSTANCE = struct.Struct("<3fi")
INSTANCE_STRIDE = _INSTANCE.size
TEX_INDEX_OFFSET = struct.calcsize("<3f")


@dataclass(frozen=True)
class BlockInstance:
    """Position offset and texture slot of one drawn cube."""

    pos: tuple[float, float, float]
    tex_index: int


def pack_instances(instances: Iterable[BlockInstance]) -> bytes:
    """Tightly packed little-endian ``vec3 + int`` records, 16 bytes each."""
    return b"".join(_INSTANCE.pack(*inst.pos, inst.tex_index) for inst in instances)


class InstanceVBO:
    """Vertex buffer for instance attributes."""

    def __init__(self) -> None:
        self.id = _gen_name(gl.glGenBuffers)

    def bind(self) -> None:
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.id)

    def update(self, instances: Iterable[BlockInstance]) -> None:
        """Replace the buffer contents with ``instances``."""
        data = pack_instances(instances)
        self.bind()
        gl.glBufferData(gl.GL_ARRAY_BUFFER, len(data), data or None, gl.GL_STATIC_DRAW)

    def delete(self) -> None:
        """Release the GL buffer; further calls do nothing."""
        if self.id:
            _delete_name(gl.glDeleteBuffers, self.id)
            self.id = 0