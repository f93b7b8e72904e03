"""Free-look camera and view/projection matrices.

Matrices are row-major and act on column vectors: ``m @ v``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

_WORLD_UP = np.array([0.0, 1.0, 0.0])


def _normalize(v: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(v))
    if norm == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / norm


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = np.asarray(eye, dtype=float)
    f = _normalize(np.asarray(center, dtype=float) - eye)
    s = _normalize(np.cross(f, np.asarray(up, dtype=float)))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with clip depth in [-1, 1]; ``fovy`` in radians."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


@dataclass
class Camera:
    """Position plus yaw/pitch orientation, angles in degrees."""

    pos: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 3.0]))
    yaw: float = -90.0
    pitch: float = 0.0
    fov: float = 70.0
    near: float = 0.1
    far: float = 1000.0
    mouse_sensitivity: float = 0.1
    move_speed: float = 5.0

    def __post_init__(self) -> None:
        self.pos = np.asarray(self.pos, dtype=float)

    def front(self) -> np.ndarray:
        yaw, pitch = math.radians(self.yaw), math.radians(self.pitch)
        f = np.array(
            [
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            ]
        )
        return _normalize(f)

    def right(self) -> np.ndarray:
        return _normalize(np.cross(self.front(), _WORLD_UP))

    def up(self) -> np.ndarray:
        return _normalize(np.cross(self.right(), self.front()))

    def view(self) -> np.ndarray:
        return look_at(self.pos, self.pos + self.front(), _WORLD_UP)

    def proj(self, aspect: float) -> np.ndarray:
        return perspective(math.radians(self.fov), aspect, self.near, self.far)