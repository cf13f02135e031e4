"""GLSL shader program wrapper."""

from __future__ import annotations

from typing import Dict

import numpy as np
from OpenGL import GL as gl


class ShaderCompilationError(RuntimeError):
    """Raised when GLSL compilation or program linking fails."""


def _compile(source: str, stage) -> int:
    shader = gl.glCreateShader(stage)
    gl.glShaderSource(shader, source)
    gl.glCompileShader(shader)
    if not gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS):
        info = gl.glGetShaderInfoLog(shader)
        gl.glDeleteShader(shader)
        if isinstance(info, bytes):
            info = info.decode("utf-8", errors="replace")
        raise ShaderCompilationError(f"Shader compile failed: {info}")
    return shader


class ShaderProgram:
    def __init__(self, vertex_source: str, fragment_source: str):
        self.vertex_source = vertex_source
        self.fragment_source = fragment_source
        self._program = 0
        self._uniform_cache: Dict[str, int] = {}

    def ensure_ready(self):
        if self._program:
            return
        vs = _compile(self.vertex_source, gl.GL_VERTEX_SHADER)
        fs = _compile(self.fragment_source, gl.GL_FRAGMENT_SHADER)
        program = gl.glCreateProgram()
        gl.glAttachShader(program, vs)
        gl.glAttachShader(program, fs)
        gl.glLinkProgram(program)
        gl.glDeleteShader(vs)
        gl.glDeleteShader(fs)
        if not gl.glGetProgramiv(program, gl.GL_LINK_STATUS):
            info = gl.glGetProgramInfoLog(program)
            gl.glDeleteProgram(program)
            if isinstance(info, bytes):
                info = info.decode("utf-8", errors="replace")
            raise ShaderCompilationError(f"Program link failed: {info}")
        self._program = program

    def use(self):
        gl.glUseProgram(self._program)

    def stop(self):
        gl.glUseProgram(0)

    def delete(self):
        if self._program:
            gl.glDeleteProgram(self._program)
            self._program = 0
            self._uniform_cache.clear()

    def _location(self, name: str) -> int:
        loc = self._uniform_cache.get(name)
        if loc is None:
            loc = gl.glGetUniformLocation(self._program, name)
            self._uniform_cache[name] = loc
        return loc

    def set_uniform_matrix4(self, name: str, matrix):
        # numpy is row-major, GL expects column-major: let GL transpose.
        data = np.ascontiguousarray(matrix, dtype=np.float32)
        gl.glUniformMatrix4fv(self._location(name), 1, gl.GL_TRUE, data)

    def set_uniform_vec3(self, name: str, vector):
        x, y, z = (float(v) for v in vector)
        gl.glUniform3f(self._location(name), x, y, z)

    def set_uniform_vec3_array(self, name: str, vectors):
        data = np.ascontiguousarray(vectors, dtype=np.float32).reshape(-1, 3)
        gl.glUniform3fv(self._location(name), data.shape[0], data)

    def set_uniform_int(self, name: str, value: int):
        gl.glUniform1i(self._location(name), int(value))
