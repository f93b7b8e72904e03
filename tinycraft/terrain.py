"""Flat terrain generation."""

from __future__ import annotations

import random

from .world import Block, BlockId


def make_terrain(terrain_width: int, terrain_height: int, rng: random.Random | None = None) -> list[Block]:
    """Build a square slab of blocks centred on the origin.

    All layers but the top are solid; each top-layer cell is filled with
    probability 4/10. The two highest layers are turf, the rest tile.
    """
    rng = rng if rng is not None else random.Random()
    half = terrain_width // 2
    blocks: list[Block] = []
    for x in range(-half, half):
        for z in range(-half, half):
            for y in range(terrain_height):
                block_id = BlockId.TURF if y >= terrain_height - 2 else BlockId.TILE
                if y < terrain_height - 1 or rng.randrange(10) < 4:
                    blocks.append(Block((x, y, z), block_id))
    return blocks