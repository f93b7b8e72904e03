"""GLSL program compilation and linking."""

from __future__ import annotations

from collections.abc import Callable


class _LazyGL:
    """Defers loading the OpenGL bindings until the first GL call."""

    def __getattr__(self, name: str):
        from pyglet import gl as pyglet_gl

        value = getattr(pyglet_gl, name)
        setattr(self, name, value)
        return value


class _LazyShaderBackend:
    """Defers loading pyglet's shader objects until first use."""

    def __getattr__(self, name: str):
        from pyglet.graphics import shader as pyglet_shader

        value = getattr(pyglet_shader, name)
        setattr(self, name, value)
        return value


gl = _LazyGL()
backend = _LazyShaderBackend()


class ShaderError(RuntimeError):
    """A shader failed to compile or a program failed to link."""


def _gen_name(generator: Callable) -> int:
    """Create one GL object name with a glGen* style function."""
    name = gl.GLuint(0)
    generator(1, name)
    return name.value


def _delete_name(deleter: Callable, name: int) -> None:
    """Release one GL object name with a glDelete* style function."""
    deleter(1, gl.GLuint(name))


def _c_string(text: str):
    """A NUL-terminated GL character buffer holding ``text``."""
    raw = text.encode("utf-8")
    buffer = (gl.GLchar * (len(raw) + 1))()
    buffer.value = raw
    return buffer


def _compile(src: str, kind: str):
    try:
        return backend.Shader(src, kind)
    except backend.ShaderException as exc:
        raise ShaderError(f"Shader compile error: {exc}") from exc


def _link(vs, fs):
    try:
        return backend.ShaderProgram(vs, fs)
    except backend.ShaderException as exc:
        raise ShaderError(f"Program link error: {exc}") from exc


class ShaderProgram:
    """A linked vertex + fragment shader program."""

    def __init__(self, vert_src: str, frag_src: str) -> None:
        vs = _compile(vert_src, "vertex")
        try:
            fs = _compile(frag_src, "fragment")
            try:
                self._program = _link(vs, fs)
            finally:
                fs.delete()
        finally:
            vs.delete()
        self.id: int = self._program.id

    def use(self) -> None:
        """Make this the current program."""
        gl.glUseProgram(self.id)

    def uniform_location(self, name: str) -> int:
        """Location of a uniform, or -1 if the program has none by that name."""
        return gl.glGetUniformLocation(self.id, _c_string(name))

    def delete(self) -> None:
        """Release the GL program; further calls do nothing."""
        if self.id:
            self._program.delete()
            self.id = 0