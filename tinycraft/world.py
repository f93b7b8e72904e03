"""Block world: block records, ray picking and edits."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import IntEnum

Vec3 = tuple[float, float, float]
IVec3 = tuple[int, int, int]


class BlockId(IntEnum):
    """Block material; the value doubles as the texture slot."""

    TILE = 0
    TURF = 1
    CARDBOARD = 2


def _ivec3(values: Iterable[float]) -> IVec3:
    x, y, z = (int(v) for v in values)
    return (x, y, z)


def _vec3(values: Iterable[float]) -> Vec3:
    x, y, z = (float(v) for v in values)
    return (x, y, z)


@dataclass(frozen=True)
class Block:
    """A unit cube centred on an integer grid position."""

    pos: IVec3
    id: BlockId

    def __post_init__(self) -> None:
        object.__setattr__(self, "pos", _ivec3(self.pos))
        object.__setattr__(self, "id", BlockId(self.id))


@dataclass(frozen=True)
class BlockHitInfo:
    """Result of a successful ray pick.

    ``face_index``: 0=bottom, 1=right, 2=top, 3=left, 4=front, 5=back.
    ``hit_pos`` is the intersection point truncated to integers.
    """

    block_index: int
    block_pos: IVec3
    face_index: int
    hit_pos: IVec3
    distance: float


def _slab_interval(pos: IVec3, origin: Vec3, direction: Vec3) -> tuple[float, float] | None:
    """Entry/exit ray parameters for the cube at ``pos``, or None if a slab is missed."""
    t_min, t_max = -math.inf, math.inf
    for centre, o, d in zip(pos, origin, direction):
        low, high = centre - 0.5, centre + 0.5
        if d != 0.0:
            t1 = (low - o) / d
            t2 = (high - o) / d
            t_min = max(t_min, min(t1, t2))
            t_max = min(t_max, max(t1, t2))
        elif o < low or o > high:
            return None
    return t_min, t_max


def _face_of(offset: Vec3) -> int:
    ox, oy, oz = offset
    ax, ay, az = abs(ox), abs(oy), abs(oz)
    if ax > ay and ax > az:
        return 1 if ox > 0 else 3
    if ay > ax and ay > az:
        return 2 if oy > 0 else 0
    return 4 if oz > 0 else 5


class World:
    """An unordered collection of blocks."""

    def __init__(self, blocks: Iterable[Block] = ()) -> None:
        self._blocks: list[Block] = list(blocks)

    def blocks(self) -> tuple[Block, ...]:
        """All blocks, in insertion order."""
        return tuple(self._blocks)

    def raycast(
        self, origin: Sequence[float], direction: Sequence[float], max_distance: float
    ) -> BlockHitInfo | None:
        """Return the nearest block hit within ``max_distance``, or None."""
        o = _vec3(origin)
        d = _vec3(direction)
        best: BlockHitInfo | None = None
        best_distance = max_distance + 1.0

        for index, block in enumerate(self._blocks):
            interval = _slab_interval(block.pos, o, d)
            if interval is None:
                continue
            t_min, t_max = interval
            if t_max < t_min or t_min < 0 or t_min > max_distance:
                continue

            intersection = tuple(oc + t_min * dc for oc, dc in zip(o, d))
            offset = tuple(ic - pc for ic, pc in zip(intersection, block.pos))
            face = _face_of(offset)  # type: ignore[arg-type]

            if t_min < best_distance:
                best_distance = t_min
                best = BlockHitInfo(
                    block_index=index,
                    block_pos=block.pos,
                    face_index=face,
                    hit_pos=_ivec3(intersection),
                    distance=t_min,
                )
        return best

    def add(self, block: Block) -> None:
        """Append a block."""
        self._blocks.append(block)

    def remove(self, pos: Sequence[int]) -> None:
        """Remove every block at ``pos``."""
        target = _ivec3(pos)
        self._blocks = [b for b in self._blocks if b.pos != target]

    def has_block(self, pos: Sequence[int]) -> bool:
        """Whether any block occupies ``pos``."""
        target = _ivec3(pos)
        return any(b.pos == target for b in self._blocks)