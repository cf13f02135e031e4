"""OpenGL rendering of the scene. Importing this package requires PyOpenGL."""

from cubespace.visualization.render.shader import ShaderProgram, ShaderCompilationError
from cubespace.visualization.render.renderer import SceneRenderer

__all__ = [
    "ShaderProgram",
    "ShaderCompilationError",
    "SceneRenderer",
]
