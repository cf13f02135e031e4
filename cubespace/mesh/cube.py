"""Colored cube built from six independent quad faces."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass

import numpy as np

from .mesh import VertexLayout, packed_color_vertex_layout

FACE_NAMES = ("top", "bottom", "right", "left", "front", "back")

FACE_NORMALS = np.array([
    [0.0, 0.0, 1.0],
    [0.0, 0.0, -1.0],
    [1.0, 0.0, 0.0],
    [-1.0, 0.0, 0.0],
    [0.0, -1.0, 0.0],
    [0.0, 1.0, 0.0],
], dtype=np.float32)

# Corner signs of each face, counter-clockwise seen from outside.
FACE_CORNERS = np.array([
    [[1, 1, 1], [-1, 1, 1], [-1, -1, 1], [1, -1, 1]],          # top
    [[-1, -1, -1], [-1, 1, -1], [1, 1, -1], [1, -1, -1]],      # bottom
    [[1, 1, 1], [1, -1, 1], [1, -1, -1], [1, 1, -1]],          # right
    [[-1, -1, -1], [-1, -1, 1], [-1, 1, 1], [-1, 1, -1]],      # left
    [[-1, -1, -1], [1, -1, -1], [1, -1, 1], [-1, -1, 1]],      # front
    [[1, 1, 1], [1, 1, -1], [-1, 1, -1], [-1, 1, 1]],          # back
], dtype=np.float32)

# Palette index per face corner: each face shows a different rotation of the four colors.
CORNER_COLOR_IDS = (
    (0, 1, 2, 3),
    (2, 3, 0, 1),
    (0, 3, 1, 2),
    (0, 2, 1, 3),
    (0, 1, 3, 2),
    (0, 2, 3, 1),
)

PALETTE_HUES = (0.0, 90.0, 180.0, 270.0)
HIGHLIGHT_SATURATION = 1.0
PLAIN_SATURATION = 0.4

FAN_INDICES = np.array([0, 1, 2, 3], dtype=np.uint16)

FLOATS_PER_VERTEX = 7


def pack_color(r: float, g: float, b: float, a: float = 1.0) -> np.float32:
    """
    Pack an RGBA color into one float32.

    The 32 bits hold ABGR bytes (red in the low byte), so in little-endian
    memory the bytes read R, G, B, A. The lowest alpha bit is cleared to keep
    the float from becoming a NaN.
    """
    value = (int(255 * a) << 24) | (int(255 * b) << 16) | (int(255 * g) << 8) | int(255 * r)
    value &= 0xFEFFFFFF
    return np.array([value], dtype=np.uint32).view(np.float32)[0]


def unpack_color(packed) -> tuple[float, float, float, float]:
    value = int(np.array([packed], dtype=np.float32).view(np.uint32)[0])
    r = (value & 0xFF) / 255.0
    g = ((value >> 8) & 0xFF) / 255.0
    b = ((value >> 16) & 0xFF) / 255.0
    a = ((value >> 24) & 0xFF) / 255.0
    return r, g, b, a


def cube_palette(highlighted: bool) -> list[np.float32]:
    saturation = HIGHLIGHT_SATURATION if highlighted else PLAIN_SATURATION
    palette = []
    for hue in PALETTE_HUES:
        r, g, b = colorsys.hsv_to_rgb(hue / 360.0, saturation, 1.0)
        palette.append(pack_color(r, g, b, 1.0))
    return palette


@dataclass(frozen=True, eq=False)
class CubeMesh:
    """Immutable vertex data for one cube: six faces of four interleaved vertices."""

    faces: np.ndarray
    highlighted: bool
    size: float

    @property
    def positions(self) -> np.ndarray:
        return self.faces[:, :, 0:3]

    @property
    def normals(self) -> np.ndarray:
        return self.faces[:, :, 3:6]

    @property
    def colors(self) -> np.ndarray:
        return self.faces[:, :, 6]

    @property
    def face_count(self) -> int:
        return self.faces.shape[0]

    def face(self, name: str) -> np.ndarray:
        return self.faces[FACE_NAMES.index(name)]

    def interleaved_buffer(self) -> np.ndarray:
        """All faces back to back, ready for a single vertex buffer."""
        return np.ascontiguousarray(self.faces.reshape(-1), dtype=np.float32)

    @staticmethod
    def vertex_layout() -> VertexLayout:
        return packed_color_vertex_layout()


def build_cube(highlighted: bool, size: float = 10.0) -> CubeMesh:
    half = size / 2.0
    palette = cube_palette(highlighted)

    faces = np.zeros((len(FACE_NAMES), 4, FLOATS_PER_VERTEX), dtype=np.float32)
    faces[:, :, 0:3] = FACE_CORNERS * half
    faces[:, :, 3:6] = FACE_NORMALS[:, np.newaxis, :]
    for i, color_ids in enumerate(CORNER_COLOR_IDS):
        for j, color_id in enumerate(color_ids):
            faces[i, j, 6] = palette[color_id]

    faces.setflags(write=False)
    return CubeMesh(faces=faces, highlighted=highlighted, size=size)
