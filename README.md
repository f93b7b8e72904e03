# tinycraft

tinycraft is a small voxel sandbox. You fly around a generated patch of
terrain and break and place blocks. The blocks are drawn with instanced OpenGL
rendering. A crosshair sits in the middle of the screen.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
tinycraft
tinycraft --width 1920 --height 1080
```

The window opens at 1280×720 unless `--width` and `--height` say otherwise. An
OpenGL 3.3 context is needed.

The terrain is 32×32 blocks and four layers deep. The top layer is only partly
filled. The upper two layers are turf and the layers below them are tile.

Textures are read from `assets/` in the working directory. The files are
`tile.png`, `turf.png`, `cardboard.png` and `crosshair.png`. If a file cannot
be loaded, a warning is logged and nothing is bound in its place.

| Control          | Action                                           |
|------------------|--------------------------------------------------|
| W / A / S / D    | Move forward / left / back / right (horizontal)  |
| Space / Shift    | Move up / down                                   |
| Mouse            | Look around (pitch is limited to ±89.9°)         |
| Left click       | Break the block under the crosshair              |
| Right click      | Place the held block against the face hit        |
| 1 / 2 / 3        | Hold tile / turf / cardboard                     |
| 0                | Hold nothing                                     |
| Escape           | Release the mouse cursor (a left click grabs it) |

When the game starts you hold nothing. Press 1, 2 or 3 before right-clicking
to place a block.

Blocks can be reached from up to 10 units away. Breaking and placing each have
a 0.1 second cooldown.

## Using the library

The world model, the camera and the input state work without a window:

```python
import random

from tinycraft.camera import Camera
from tinycraft.terrain import make_terrain
from tinycraft.world import World

world = World(make_terrain(32, 4, random.Random(1)))
camera = Camera()
hit = world.raycast(camera.pos, camera.front(), 10.0)
if hit is not None:
    world.remove(hit.block_pos)

vp = camera.proj(16 / 9) @ camera.view()
```

### Modules

- `tinycraft.world` holds the block model.
  - `BlockId` lists the materials: `TILE`, `TURF` and `CARDBOARD`.
  - `Block` is a frozen block with a position and an id.
  - `BlockHitInfo` describes a ray hit.
  - `World` holds the blocks:
    - `blocks()` returns them.
    - `raycast(origin, direction, max_distance)` returns the nearest hit, or `None`.
    - `add(block)` adds a block.
    - `remove(pos)` removes the blocks at a position.
    - `has_block(pos)` tells whether a position is occupied.
- `tinycraft.terrain.make_terrain(terrain_width, terrain_height, rng=None)`
  builds the starting terrain. Pass a `random.Random` to make the result
  reproducible.
- `tinycraft.camera` has `Camera`, with `front()`, `right()`, `up()`, `view()`
  and `proj(aspect)`. It also has the matrix helpers `look_at` and
  `perspective`. Matrices are row-major numpy arrays and act on column vectors.
- `tinycraft.input` has the enums `Key` and `Mouse` and the class `Input`.
  - Feed `Input` one snapshot per frame with `update(keys_down, buttons_down, cursor_pos)`.
  - Query it with `is_down`, `was_pressed` and `was_released`.
  - Read the cursor with `mouse_pos()` and `mouse_delta()`.
  - `add_scroll` adds to the scroll amount. `scroll_delta` returns the amount and resets it to zero.
- `tinycraft.gfx` holds the OpenGL side. Every module in it except
  `instance_buffer` needs a current GL context for its classes. The pure
  helpers work without one.
  - `shader`: `ShaderProgram` and `ShaderError`.
  - `mesh`: `CubeMesh`. `cube_geometry()` gives the cube's vertices and indices.
  - `instance_buffer`: `BlockInstance` and `InstanceVBO`. `pack_instances`
    packs instances into 16-byte records.
  - `texture`: `Texture2D` and `load_texture`. `decode_image` reads a file as
    bottom-up RGBA.
  - `renderer`: `Renderer`. `build_instances` turns blocks into instances.
- `tinycraft.app` has `Application`, the window and game loop. It can be used
  as a context manager. `main` is the command's entry point. The module also
  has these helpers, which do not need a window:
  - `crosshair_vertices`
  - `placement_position`
  - `process_movement`
  - `apply_mouse_look`

## What it does not do

- Worlds are not saved or loaded. Each start generates fresh terrain.
- There is no gravity, no collision and no player body. The camera flies freely, including through blocks.
- Blocks are kept in one flat list, with no chunking. Every ray cast checks every block.