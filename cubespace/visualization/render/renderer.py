"""Draws the cube lattice: one vertex buffer per distinct mesh, six triangle fans per cube."""

from __future__ import annotations

import ctypes
from typing import Dict

from OpenGL import GL as gl

from cubespace import log
from cubespace.mesh import CubeMesh, VertexAttribType
from cubespace.visualization.render.shader import ShaderProgram
from cubespace.visualization.scene import Scene

MAX_LIGHTS = 4

VERTEX_SHADER = """
#version 330 core

layout(location = 0) in vec3 a_position;
layout(location = 1) in vec3 a_normal;
layout(location = 2) in vec4 a_color;

uniform mat4 u_model;
uniform mat4 u_view;
uniform mat4 u_projection;

out vec3 v_normal;
out vec4 v_color;

void main() {
    // model matrix carries rotation + translation only
    v_normal = mat3(u_model) * a_normal;
    v_color = a_color;
    gl_Position = u_projection * u_view * u_model * vec4(a_position, 1.0);
}
"""

FRAGMENT_SHADER = """
#version 330 core

#define MAX_LIGHTS 4

in vec3 v_normal;
in vec4 v_color;

uniform vec3 u_ambient;
uniform int u_light_count;
uniform vec3 u_light_color[MAX_LIGHTS];
uniform vec3 u_light_dir[MAX_LIGHTS];   // direction the light travels

out vec4 FragColor;

void main() {
    vec3 N = normalize(v_normal);
    vec3 light = u_ambient;
    for (int i = 0; i < u_light_count; ++i) {
        vec3 L = normalize(-u_light_dir[i]);
        light += u_light_color[i] * max(dot(N, L), 0.0);
    }
    FragColor = vec4(clamp(v_color.rgb * light, 0.0, 1.0), 1.0);
}
"""

_GL_TYPES = {
    VertexAttribType.FLOAT32: gl.GL_FLOAT,
    VertexAttribType.UINT8: gl.GL_UNSIGNED_BYTE,
}


class _MeshBuffers:
    def __init__(self, vao: int, vbo: int, face_count: int):
        self.vao = vao
        self.vbo = vbo
        self.face_count = face_count


class SceneRenderer:
    """GPU side of the scene. Must be used with a current GL 3.3 context."""

    def __init__(self):
        self.shader = ShaderProgram(VERTEX_SHADER, FRAGMENT_SHADER)
        self._buffers: Dict[int, _MeshBuffers] = {}
        self._viewport = (0, 0, 1, 1)

    def init_gl(self, scene: Scene):
        self.shader.ensure_ready()
        if len(scene.config.lights) > MAX_LIGHTS:
            log.warn(f"[SceneRenderer] only the first {MAX_LIGHTS} of {len(scene.config.lights)} lights are used")
        for cube in scene.cubes:
            self._upload(cube.mesh)
        log.debug(f"[SceneRenderer] uploaded {len(self._buffers)} meshes")

    def _upload(self, mesh: CubeMesh) -> _MeshBuffers:
        key = id(mesh)
        buffers = self._buffers.get(key)
        if buffers is not None:
            return buffers

        data = mesh.interleaved_buffer()
        layout = mesh.vertex_layout()

        vao = gl.glGenVertexArrays(1)
        vbo = gl.glGenBuffers(1)
        gl.glBindVertexArray(vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, data.nbytes, data, gl.GL_STATIC_DRAW)

        for location, attr in enumerate(layout.attributes):
            gl.glEnableVertexAttribArray(location)
            gl.glVertexAttribPointer(
                location,
                attr.size,
                _GL_TYPES[attr.vtype],
                gl.GL_TRUE if attr.normalized else gl.GL_FALSE,
                layout.stride,
                ctypes.c_void_p(attr.offset),
            )

        gl.glBindVertexArray(0)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)

        buffers = _MeshBuffers(vao, vbo, mesh.face_count)
        self._buffers[key] = buffers
        return buffers

    def resize(self, width: int, height: int):
        self._viewport = (0, 0, max(1, width), max(1, height))

    def render(self, scene: Scene):
        config = scene.config
        r, g, b = config.background_color
        gl.glViewport(*self._viewport)
        gl.glClearColor(r, g, b, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_CULL_FACE)

        lights = config.lights[:MAX_LIGHTS]

        shader = self.shader
        shader.use()
        shader.set_uniform_matrix4("u_view", scene.camera.view_matrix())
        shader.set_uniform_matrix4("u_projection", scene.camera.projection_matrix())
        shader.set_uniform_vec3("u_ambient", config.ambient_color)
        shader.set_uniform_int("u_light_count", len(lights))
        if lights:
            shader.set_uniform_vec3_array("u_light_color", [light.color for light in lights])
            shader.set_uniform_vec3_array("u_light_dir", [light.direction for light in lights])

        for cube in scene.cubes:
            buffers = self._upload(cube.mesh)
            shader.set_uniform_matrix4("u_model", cube.model_matrix())
            gl.glBindVertexArray(buffers.vao)
            for face in range(buffers.face_count):
                gl.glDrawArrays(gl.GL_TRIANGLE_FAN, face * 4, 4)

        gl.glBindVertexArray(0)
        shader.stop()

    def dispose(self):
        for buffers in self._buffers.values():
            gl.glDeleteBuffers(1, [buffers.vbo])
            gl.glDeleteVertexArrays(1, [buffers.vao])
        self._buffers.clear()
        self.shader.delete()
