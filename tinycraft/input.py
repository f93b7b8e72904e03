"""Keyboard and mouse state tracked frame by frame."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum


class Key(IntEnum):
    """Tracked keys, valued by their GLFW key codes."""

    W = 87
    A = 65
    S = 83
    D = 68
    SPACE = 32
    SHIFT = 340
    ESCAPE = 256
    P = 80
    O = 79
    LEFT = 263
    RIGHT = 262
    UP = 265
    DOWN = 264
    N1 = 49
    N2 = 50
    N3 = 51
    N4 = 52
    N5 = 53
    N6 = 54
    N7 = 55
    N8 = 56
    N9 = 57
    N0 = 48


class Mouse(IntEnum):
    """Mouse buttons, valued by their GLFW button numbers."""

    LEFT = 0
    RIGHT = 1


class Input:
    """Current and previous-frame snapshots of keys, buttons and cursor."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Forget all state."""
        self._keys: frozenset[int] = frozenset()
        self._keys_prev: frozenset[int] = frozenset()
        self._buttons: frozenset[int] = frozenset()
        self._buttons_prev: frozenset[int] = frozenset()
        self._mouse_pos = (0.0, 0.0)
        self._mouse_delta = (0.0, 0.0)
        self._scroll = 0.0

    def update(
        self,
        keys_down: Iterable[int],
        buttons_down: Iterable[int],
        cursor_pos: tuple[float, float],
    ) -> None:
        """Take a new frame's snapshot; the old one becomes the previous frame."""
        self._keys_prev, self._keys = self._keys, frozenset(int(k) for k in keys_down)
        self._buttons_prev, self._buttons = self._buttons, frozenset(int(b) for b in buttons_down)
        x, y = (float(c) for c in cursor_pos)
        px, py = self._mouse_pos
        self._mouse_delta = (x - px, y - py)
        self._mouse_pos = (x, y)

    def _states(self, control: Key | Mouse) -> tuple[bool, bool]:
        if isinstance(control, Mouse):
            code = int(control)
            return code in self._buttons, code in self._buttons_prev
        if isinstance(control, Key):
            code = int(control)
            return code in self._keys, code in self._keys_prev
        raise TypeError(f"expected Key or Mouse, got {type(control).__name__}")

    def is_down(self, control: Key | Mouse) -> bool:
        now, _ = self._states(control)
        return now

    def was_pressed(self, control: Key | Mouse) -> bool:
        now, before = self._states(control)
        return now and not before

    def was_released(self, control: Key | Mouse) -> bool:
        now, before = self._states(control)
        return before and not now

    def mouse_pos(self) -> tuple[float, float]:
        return self._mouse_pos

    def mouse_delta(self) -> tuple[float, float]:
        return self._mouse_delta

    def add_scroll(self, amount: float) -> None:
        """Accumulate scroll-wheel movement."""
        self._scroll += amount

    def scroll_delta(self) -> float:
        """Return accumulated scroll and reset it to zero."""
        delta, self._scroll = self._scroll, 0.0
        return delta