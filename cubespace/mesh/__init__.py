from .mesh import VertexAttribType, VertexAttribute, VertexLayout, packed_color_vertex_layout
from .cube import CubeMesh, build_cube, pack_color, unpack_color, FACE_NAMES, FAN_INDICES

__all__ = [
    "VertexAttribType",
    "VertexAttribute",
    "VertexLayout",
    "packed_color_vertex_layout",
    "CubeMesh",
    "build_cube",
    "pack_color",
    "unpack_color",
    "FACE_NAMES",
    "FAN_INDICES",
]
