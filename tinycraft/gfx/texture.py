"""Image loading into OpenGL 2D textures."""

from __future__ import annotations

import os
from dataclasses import dataclass

from PIL import Image

from .shader import _gen_name, gl


@dataclass(frozen=True)
class Texture2D:
    """A GL texture and the size and channel count of its source image."""

    tex_id: int
    width: int
    height: int
    channels: int


def _source_channels(img: Image.Image) -> int:
    if img.mode == "P":
        return 4 if "transparency" in img.info else 3
    return len(img.getbands())


def decode_image(path: str | os.PathLike) -> tuple[int, int, int, bytes]:
    """Read an image as bottom-up RGBA rows.

    Returns ``(width, height, channels, pixels)`` where ``channels`` is the
    channel count of the file itself.
    """
    with Image.open(path) as img:
        channels = _source_channels(img)
        rgba = img.convert("RGBA").transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        return rgba.width, rgba.height, channels, rgba.tobytes()


def load_texture(path: str | os.PathLike) -> Texture2D:
    """Upload an image file as a mipmapped, edge-clamped RGBA texture."""
    width, height, channels, pixels = decode_image(path)
    tex_id = _gen_name(gl.glGenTextures)
    gl.glBindTexture(gl.GL_TEXTURE_2D, tex_id)
    gl.glTexImage2D(
        gl.GL_TEXTURE_2D, 0, gl.GL_RGBA8, width, height, 0, gl.GL_RGBA, gl.GL_UNSIGNED_BYTE, pixels
    )
    gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)
    return Texture2D(tex_id=tex_id, width=width, height=height, channels=channels)