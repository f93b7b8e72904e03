"""Game window, main loop and player interaction."""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Sequence

import numpy as np

from .camera import Camera
from .gfx.instance_buffer import InstanceVBO
from .gfx.mesh import CubeMesh
from .gfx.renderer import Renderer
from .gfx.shader import ShaderProgram, _gen_name, gl
from .gfx.texture import load_texture
from .input import Input, Key, Mouse
from .terrain import make_terrain
from .world import Block, BlockHitInfo, BlockId, World

log = logging.getLogger(__name__)

ASSETS_DIR = "assets"
BLOCK_TEXTURES = ("tile.png", "turf.png", "cardboard.png")
CROSSHAIR_TEXTURE = "crosshair.png"
CROSSHAIR_UNIT = 10
CROSSHAIR_PX = 100

PLACE_COOLDOWN = 0.1
BREAK_COOLDOWN = 0.1
PLAYER_REACH = 10.0
PITCH_LIMIT = 89.9

# Unit normals indexed by BlockHitInfo.face_index.
FACE_NORMALS: tuple[tuple[int, int, int], ...] = (
    (0, -1, 0),
    (1, 0, 0),
    (0, 1, 0),
    (-1, 0, 0),
    (0, 0, 1),
    (0, 0, -1),
)

HUD_INDICES = (0, 2, 1, 2, 0, 3)

BLOCK_VS = """
#version 330 core
layout (location = 0) in vec3 aPos;
layout (location = 1) in vec3 instanceOffset;
layout (location = 2) in vec2 aUV;
layout (location = 3) in int texIndex;
out vec2 vUV;
flat out int vTexIndex;

uniform mat4 uVP;
void main() {
    vec3 pos = aPos + instanceOffset;
    vUV = aUV;
    vTexIndex = texIndex;
    gl_Position = uVP * vec4(pos, 1.0);
}
"""

BLOCK_FS = """
#version 330 core
in vec2 vUV;
flat in int vTexIndex;
uniform sampler2D uTex[3];
out vec4 FragColor;
void main() {
    FragColor = texture(uTex[vTexIndex], vUV);
}
"""

GUI_VS = """
#version 330 core
layout(location = 0) in vec2 aPos;
layout(location = 1) in vec2 aUV;
out vec2 vUV;
void main() {
    gl_Position = vec4(aPos, 0.0, 1.0);
    vUV = aUV;
}
"""

GUI_FS = """
#version 330 core
in vec2 vUV;
uniform sampler2D uTex;
out vec4 FragColor;
void main() {
    FragColor = texture(uTex, vUV);
}
"""

_HELD_BLOCK_KEYS: tuple[tuple[Key, BlockId | None], ...] = (
    (Key.N1, BlockId.TILE),
    (Key.N2, BlockId.TURF),
    (Key.N3, BlockId.CARDBOARD),
    (Key.N0, None),
)

_PYGLET_KEY_NAMES: dict[Key, str] = {
    Key.W: "W",
    Key.A: "A",
    Key.S: "S",
    Key.D: "D",
    Key.SPACE: "SPACE",
    Key.SHIFT: "LSHIFT",
    Key.ESCAPE: "ESCAPE",
    Key.P: "P",
    Key.O: "O",
    Key.LEFT: "LEFT",
    Key.RIGHT: "RIGHT",
    Key.UP: "UP",
    Key.DOWN: "DOWN",
    Key.N1: "_1",
    Key.N2: "_2",
    Key.N3: "_3",
    Key.N4: "_4",
    Key.N5: "_5",
    Key.N6: "_6",
    Key.N7: "_7",
    Key.N8: "_8",
    Key.N9: "_9",
    Key.N0: "_0",
}


def crosshair_vertices(crosshair_px: int, fbw: int, fbh: int) -> np.ndarray | None:
    """Quad of ``(x, y, u, v)`` rows in NDC for a centred crosshair.

    Returns None when the framebuffer has no area.
    """
    if fbw <= 0 or fbh <= 0:
        return None
    hx = crosshair_px / fbw
    hy = crosshair_px / fbh
    return np.array(
        [
            [-hx, +hy, 0.0, 1.0],
            [+hx, +hy, 1.0, 1.0],
            [+hx, -hy, 1.0, 0.0],
            [-hx, -hy, 0.0, 0.0],
        ],
        dtype=np.float32,
    )


def placement_position(hit: BlockHitInfo | None) -> tuple[int, int, int] | None:
    """Grid cell adjacent to the hit face, or None without a hit."""
    if hit is None or not 0 <= hit.face_index < len(FACE_NORMALS):
        return None
    nx, ny, nz = FACE_NORMALS[hit.face_index]
    bx, by, bz = hit.block_pos
    return (bx + nx, by + ny, bz + nz)


def _horizontal(v: np.ndarray) -> np.ndarray:
    flat = np.array([v[0], 0.0, v[2]], dtype=float)
    norm = float(np.linalg.norm(flat))
    return flat / norm if norm > 0.0 else flat


def process_movement(camera: Camera, controls: Input, dt: float) -> None:
    """Move ``camera`` from WASD/Space/Shift state over ``dt`` seconds.

    Forward and strafe movement ignore pitch, so speed stays constant.
    """
    forward = _horizontal(camera.front())
    right = _horizontal(camera.right())
    up = np.array([0.0, 1.0, 0.0])
    step = camera.move_speed * dt
    moves = (
        (Key.W, forward),
        (Key.S, -forward),
        (Key.D, right),
        (Key.A, -right),
        (Key.SPACE, up),
        (Key.SHIFT, -up),
    )
    for key, direction in moves:
        if controls.is_down(key):
            camera.pos = camera.pos + direction * step


def apply_mouse_look(camera: Camera, dx: float, dy: float) -> None:
    """Turn ``camera`` by a cursor movement; ``dy`` is positive upwards."""
    camera.yaw += dx * camera.mouse_sensitivity
    camera.pitch += dy * camera.mouse_sensitivity
    camera.pitch = min(max(camera.pitch, -PITCH_LIMIT), PITCH_LIMIT)


def _held_block_selection(controls: Input, current: BlockId | None) -> BlockId | None:
    """Block chosen by the number keys pressed this frame, else ``current``."""
    held = current
    for key, block_id in _HELD_BLOCK_KEYS:
        if controls.was_pressed(key):
            held = block_id
    return held


def _load_texture_id(path: str) -> int:
    try:
        return load_texture(path).tex_id
    except OSError as exc:
        log.warning("could not load texture %s: %s", path, exc)
        return 0


def _delete_buffer(name: int) -> None:
    gl.glDeleteBuffers(1, (gl.GLuint * 1)(name))


def _delete_vertex_array(name: int) -> None:
    gl.glDeleteVertexArrays(1, (gl.GLuint * 1)(name))


class Application:
    """Window, world and render state for one game session."""

    def __init__(self, width: int, height: int, title: str) -> None:
        import pyglet
        from pyglet.window import key, mouse

        config = pyglet.gl.Config(
            major_version=3,
            minor_version=3,
            forward_compatible=True,
            double_buffer=True,
            depth_size=24,
        )
        self._window = pyglet.window.Window(
            width=width, height=height, caption=title, config=config, vsync=True
        )
        self._closed = False

        self._input = Input()
        self._key_state = key.KeyStateHandler()
        self._key_map = {getattr(key, name): int(k) for k, name in _PYGLET_KEY_NAMES.items()}
        self._button_map = {mouse.LEFT: int(Mouse.LEFT), mouse.RIGHT: int(Mouse.RIGHT)}
        self._buttons_down: set[int] = set()
        self._cursor = [0.0, 0.0]
        self._install_handlers(pyglet.event.EVENT_HANDLED, key.ESCAPE)

        self._block_textures = [_load_texture_id(f"{ASSETS_DIR}/{name}") for name in BLOCK_TEXTURES]
        self._crosshair_texture = _load_texture_id(f"{ASSETS_DIR}/{CROSSHAIR_TEXTURE}")
        self._set_cursor_disabled(True)

        self._cube = CubeMesh()
        self._instance_vbo = InstanceVBO()
        self._renderer = Renderer(BLOCK_VS, BLOCK_FS, self._cube)
        self._renderer.setup_attributes(self._cube, self._instance_vbo)

        shader = self._renderer.shader
        shader.use()
        count = len(self._block_textures)
        units = (gl.GLint * count)(*range(count))
        gl.glUniform1iv(shader.uniform_location("uTex"), count, units)
        for unit, tex_id in enumerate(self._block_textures):
            gl.glActiveTexture(gl.GL_TEXTURE0 + unit)
            gl.glBindTexture(gl.GL_TEXTURE_2D, tex_id)

        self._camera = Camera()
        self._world = World(make_terrain(32, 4))
        self._renderer.build_instance_buffer(self._world.blocks(), self._instance_vbo)
        self._need_upload = True

        self._held_block: BlockId | None = None
        self._first_mouse = True
        self._last_x = 0.0
        self._last_y = 0.0
        self._prev_left = False
        self._prev_right = False
        self._last_place_time = 0.0
        self._last_break_time = 0.0

        self._init_hud()
        self._start = time.perf_counter()
        self._last_time = self._now()

    def __enter__(self) -> Application:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _now(self) -> float:
        return time.perf_counter() - self._start

    def _install_handlers(self, handled, escape_symbol) -> None:
        def on_key_press(symbol, modifiers):
            # Escape releases the cursor rather than closing the window.
            if symbol == escape_symbol:
                return handled
            return None

        def on_mouse_press(x, y, button, modifiers):
            if button in self._button_map:
                self._buttons_down.add(self._button_map[button])

        def on_mouse_release(x, y, button, modifiers):
            if button in self._button_map:
                self._buttons_down.discard(self._button_map[button])

        def on_mouse_motion(x, y, dx, dy):
            # Accumulate a virtual cursor with y pointing down.
            self._cursor[0] += dx
            self._cursor[1] -= dy

        def on_mouse_drag(x, y, dx, dy, buttons, modifiers):
            on_mouse_motion(x, y, dx, dy)

        def on_mouse_scroll(x, y, scroll_x, scroll_y):
            self._input.add_scroll(scroll_y)

        self._window.push_handlers(self._key_state)
        self._window.push_handlers(
            on_key_press=on_key_press,
            on_mouse_press=on_mouse_press,
            on_mouse_release=on_mouse_release,
            on_mouse_motion=on_mouse_motion,
            on_mouse_drag=on_mouse_drag,
            on_mouse_scroll=on_mouse_scroll,
        )

    def _set_cursor_disabled(self, disabled: bool) -> None:
        self._cursor_disabled = disabled
        self._window.set_exclusive_mouse(disabled)

    def _init_hud(self) -> None:
        self._gui_shader = ShaderProgram(GUI_VS, GUI_FS)
        self._gui_shader.use()
        gl.glUniform1i(self._gui_shader.uniform_location("uTex"), CROSSHAIR_UNIT)

        float_size = 4
        stride = 4 * float_size
        self._hud_vao = _gen_name(gl.glGenVertexArrays)
        gl.glBindVertexArray(self._hud_vao)

        self._hud_vbo = _gen_name(gl.glGenBuffers)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._hud_vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, 4 * stride, None, gl.GL_DYNAMIC_DRAW)

        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, 0)
        gl.glEnableVertexAttribArray(1)
        gl.glVertexAttribPointer(1, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, 2 * float_size)

        indices = np.array(HUD_INDICES, dtype=np.uint32)
        self._hud_ebo = _gen_name(gl.glGenBuffers)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self._hud_ebo)
        gl.glBufferData(
            gl.GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices.tobytes(), gl.GL_STATIC_DRAW
        )
        gl.glBindVertexArray(0)

    def run(self) -> None:
        """Run frames until the window is closed."""
        while not self._window.has_exit:
            now = self._now()
            dt = now - self._last_time
            self._last_time = now

            self._window.dispatch_events()
            if self._window.has_exit:
                break
            self._poll_input()
            self._process_input(dt)
            self._handle_mouse_look()
            self._handle_block_actions()

            w, h = self._window.get_framebuffer_size()
            aspect = w / h if h > 0 else 1.0
            vp = self._camera.proj(aspect) @ self._camera.view()

            gl.glEnable(gl.GL_DEPTH_TEST)
            gl.glEnable(gl.GL_CULL_FACE)
            gl.glViewport(0, 0, w, h)
            gl.glClearColor(0.1, 0.12, 0.16, 1.0)
            gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
            if self._need_upload:
                self._renderer.build_instance_buffer(self._world.blocks(), self._instance_vbo)
                self._need_upload = False
            self._renderer.draw(vp, len(self._world.blocks()))
            self._draw_hud(w, h)
            self._window.flip()

    def _poll_input(self) -> None:
        keys_down = [code for symbol, code in self._key_map.items() if self._key_state[symbol]]
        self._input.update(keys_down, self._buttons_down, tuple(self._cursor))

    def _process_input(self, dt: float) -> None:
        process_movement(self._camera, self._input, dt)
        if self._input.is_down(Key.ESCAPE):
            self._set_cursor_disabled(False)
        if self._input.is_down(Mouse.LEFT):
            self._set_cursor_disabled(True)
            self._first_mouse = True
        self._held_block = _held_block_selection(self._input, self._held_block)

    def _handle_mouse_look(self) -> None:
        if not self._cursor_disabled:
            return
        x, y = self._input.mouse_pos()
        if self._first_mouse:
            self._last_x, self._last_y = x, y
            self._first_mouse = False
        dx = x - self._last_x
        dy = self._last_y - y
        self._last_x, self._last_y = x, y
        apply_mouse_look(self._camera, dx, dy)

    def _handle_block_actions(self) -> None:
        now_left = self._input.is_down(Mouse.LEFT)
        now_right = self._input.is_down(Mouse.RIGHT)
        now = self._now()

        if now_left and not self._prev_left:
            hit = self._world.raycast(self._camera.pos, self._camera.front(), PLAYER_REACH)
            if now - self._last_break_time > BREAK_COOLDOWN and hit is not None:
                self._world.remove(self._world.blocks()[hit.block_index].pos)
                self._need_upload = True
                self._last_break_time = now

        if now_right and not self._prev_right:
            hit = self._world.raycast(self._camera.pos, self._camera.front(), PLAYER_REACH)
            spawn = placement_position(hit)
            if (
                spawn is not None
                and self._held_block is not None
                and now - self._last_place_time > PLACE_COOLDOWN
                and not self._world.has_block(spawn)
            ):
                self._world.add(Block(spawn, self._held_block))
                self._need_upload = True
                self._last_place_time = now

        self._prev_left = now_left
        self._prev_right = now_right

    def _draw_hud(self, fbw: int, fbh: int) -> None:
        verts = crosshair_vertices(CROSSHAIR_PX, fbw, fbh)
        if verts is None:
            return
        gl.glDisable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)

        self._gui_shader.use()
        gl.glActiveTexture(gl.GL_TEXTURE0 + CROSSHAIR_UNIT)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._crosshair_texture)

        gl.glBindVertexArray(self._hud_vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._hud_vbo)
        gl.glBufferSubData(gl.GL_ARRAY_BUFFER, 0, verts.nbytes, verts.tobytes())
        gl.glDrawElements(gl.GL_TRIANGLES, len(HUD_INDICES), gl.GL_UNSIGNED_INT, None)

        gl.glBindVertexArray(0)
        gl.glDisable(gl.GL_BLEND)
        gl.glEnable(gl.GL_DEPTH_TEST)

    def close(self) -> None:
        """Release GL resources and close the window; further calls do nothing."""
        if self._closed:
            return
        self._closed = True
        for attr in ("_hud_ebo", "_hud_vbo"):
            name = getattr(self, attr, 0)
            if name:
                _delete_buffer(name)
                setattr(self, attr, 0)
        if getattr(self, "_hud_vao", 0):
            _delete_vertex_array(self._hud_vao)
            self._hud_vao = 0
        self._gui_shader.delete()
        self._renderer.shader.delete()
        self._instance_vbo.delete()
        self._cube.delete()
        self._window.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    parser = argparse.ArgumentParser(prog="tinycraft", description="Small block-building sandbox.")
    parser.add_argument("--width", type=int, default=1280, help="window width in pixels")
    parser.add_argument("--height", type=int, default=720, help="window height in pixels")
    args = parser.parse_args(argv)
    with Application(args.width, args.height, "TinyCraft") as app:
        app.run()
    return 0