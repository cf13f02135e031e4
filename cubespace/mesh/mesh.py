"""Vertex layout definitions shared by the mesh builders and the renderer."""

from enum import Enum

# GPU COMPATIBILITY

class VertexAttribType(Enum):
    FLOAT32 = "float32"
    UINT8 = "uint8"


class VertexAttribute:
    def __init__(self, name, size, vtype: VertexAttribType, offset, normalized: bool = False):
        self.name = name
        self.size = size          # число компонент
        self.vtype = vtype
        self.offset = offset      # смещение в байтах от начала вершины
        self.normalized = normalized

    def __repr__(self):
        return f"VertexAttribute({self.name!r}, size={self.size}, {self.vtype.name}, offset={self.offset})"


class VertexLayout:
    def __init__(self, stride, attributes):
        self.stride = stride    # размер одной вершины в байтах
        self.attributes = attributes  # список VertexAttribute

    def attribute(self, name: str) -> VertexAttribute:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise KeyError(name)


def packed_color_vertex_layout() -> VertexLayout:
    """Layout for pos(3) + normal(3) + packed ABGR color(1 float = 4 bytes)."""
    return VertexLayout(
        stride=7 * 4,
        attributes=[
            VertexAttribute("position", 3, VertexAttribType.FLOAT32, 0),
            VertexAttribute("normal",   3, VertexAttribType.FLOAT32, 12),
            VertexAttribute("color",    4, VertexAttribType.UINT8,   24, normalized=True),
        ]
    )
