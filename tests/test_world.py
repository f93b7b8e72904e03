import pytest

from tinycraft.world import Block, BlockId, World


def _world(*positions, block_id=BlockId.TILE):
    return World(Block(p, block_id) for p in positions)


def test_block_normalises_fields():
    block = Block((1.0, 2.0, 3.0), 1)
    assert block.pos == (1, 2, 3)
    assert block.id is BlockId.TURF


def test_add_and_has_block():
    world = World()
    assert not world.has_block((1, 2, 3))
    world.add(Block((1, 2, 3), BlockId.CARDBOARD))
    assert world.has_block((1, 2, 3))
    assert world.blocks() == (Block((1, 2, 3), BlockId.CARDBOARD),)


def test_remove_drops_all_matching_and_keeps_others():
    world = _world((0, 0, 0), (1, 0, 0), (0, 0, 0))
    world.remove((0, 0, 0))
    assert [b.pos for b in world.blocks()] == [(1, 0, 0)]


def test_remove_missing_position_is_noop():
    world = _world((0, 0, 0))
    world.remove((5, 5, 5))
    assert len(world.blocks()) == 1


def test_raycast_hits_front_face():
    world = _world((0, 0, 0))
    hit = world.raycast((0, 0, 5), (0, 0, -1), 10.0)
    assert hit is not None
    assert hit.block_index == 0
    assert hit.block_pos == (0, 0, 0)
    assert hit.face_index == 4
    assert hit.distance == pytest.approx(5 - 0.5)
    assert hit.hit_pos == (0, 0, 0)


def test_raycast_hits_top_face():
    world = _world((0, 0, 0))
    hit = world.raycast((0, 5, 0), (0, -1, 0), 10.0)
    assert hit is not None
    assert hit.face_index == 2


def test_raycast_picks_nearest_regardless_of_order():
    near, far = (0, 0, 0), (0, 0, -3)
    forward = _world(near, far).raycast((0, 0, 5), (0, 0, -1), 20.0)
    backward = _world(far, near).raycast((0, 0, 5), (0, 0, -1), 20.0)
    assert forward.block_pos == near and forward.block_index == 0
    assert backward.block_pos == near and backward.block_index == 1


def test_raycast_respects_max_distance():
    world = _world((0, 0, 0))
    assert world.raycast((0, 0, 5), (0, 0, -1), 2.0) is None


def test_raycast_ignores_blocks_behind():
    world = _world((0, 0, 0))
    assert world.raycast((0, 0, 5), (0, 0, 1), 10.0) is None


def test_raycast_misses_when_outside_zero_direction_slab():
    world = _world((0, 0, 0))
    assert world.raycast((3, 0, 5), (0, 0, -1), 10.0) is None


def test_raycast_empty_world():
    assert World().raycast((0, 0, 0), (1, 0, 0), 10.0) is None