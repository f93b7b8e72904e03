import random

from tinycraft.terrain import make_terrain
from tinycraft.world import BlockId


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return self.value


def test_same_seed_same_terrain():
    a = make_terrain(8, 4, random.Random(7))
    b = make_terrain(8, 4, random.Random(7))
    assert a == b


def test_lower_layers_are_complete():
    width, height = 6, 4
    blocks = make_terrain(width, height, random.Random(1))
    lower = [b for b in blocks if b.pos[1] < height - 1]
    assert len(lower) == width * width * (height - 1)


def test_ids_by_layer():
    height = 5
    for block in make_terrain(4, height, random.Random(3)):
        expected = BlockId.TURF if block.pos[1] >= height - 2 else BlockId.TILE
        assert block.id is expected


def test_positions_within_bounds():
    width, height = 6, 3
    for block in make_terrain(width, height, random.Random(2)):
        x, y, z = block.pos
        assert -width // 2 <= x < width // 2
        assert -width // 2 <= z < width // 2
        assert 0 <= y < height


def test_top_layer_full_when_rng_low():
    width, height = 4, 3
    blocks = make_terrain(width, height, _FixedRng(0))
    assert len(blocks) == width * width * height


def test_top_layer_empty_when_rng_high():
    width, height = 4, 3
    blocks = make_terrain(width, height, _FixedRng(9))
    assert all(b.pos[1] < height - 1 for b in blocks)


def test_generation_order_starts_at_corner():
    blocks = make_terrain(4, 2, _FixedRng(0))
    assert blocks[0].pos == (-2, 0, -2)
    assert blocks[1].pos == (-2, 1, -2)


def test_zero_width_is_empty():
    assert make_terrain(0, 4, random.Random(0)) == []