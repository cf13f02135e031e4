"""
Scene configuration.

Defaults reproduce the classic cube-grid scene. A configuration can be loaded
from a JSON file with the same keys as `SceneConfig.to_dict()`; missing keys
keep their defaults.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from cubespace.geombase import Pose3

Vec3Tuple = Tuple[float, float, float]


class SceneConfigError(ValueError):
    """Invalid scene configuration. Fatal at setup time."""


class RotationFrame(Enum):
    """Frame in which cube drags are applied."""
    WORLD = "world"
    LOCAL = "local"


@dataclass
class CameraSettings:
    position: Vec3Tuple = (10.0, -10.0, 70.0)
    target: Vec3Tuple = (0.0, 0.0, 0.0)
    up: Vec3Tuple = (0.0, 1.0, 0.0)
    fov_y_degrees: float = 67.0
    aspect: float = 1.5
    near: float = 1.0
    far: float = 500.0

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "target": list(self.target),
            "up": list(self.up),
            "fov_y_degrees": self.fov_y_degrees,
            "aspect": self.aspect,
            "near": self.near,
            "far": self.far,
        }

    @staticmethod
    def from_dict(data: dict) -> "CameraSettings":
        data = _section(data, "camera")
        default = CameraSettings()
        return CameraSettings(
            position=_vec3(data.get("position", default.position), "camera.position"),
            target=_vec3(data.get("target", default.target), "camera.target"),
            up=_vec3(data.get("up", default.up), "camera.up"),
            fov_y_degrees=_number(data, "fov_y_degrees", default.fov_y_degrees, float, "camera."),
            aspect=_number(data, "aspect", default.aspect, float, "camera."),
            near=_number(data, "near", default.near, float, "camera."),
            far=_number(data, "far", default.far, float, "camera."),
        )


@dataclass
class LightSettings:
    """Directional light: color and the direction the light travels."""
    color: Vec3Tuple = (0.8, 0.8, 0.8)
    direction: Vec3Tuple = (50.0, 50.0, 50.0)

    def to_dict(self) -> dict:
        return {"color": list(self.color), "direction": list(self.direction)}

    @staticmethod
    def from_dict(data: dict) -> "LightSettings":
        data = _section(data, "light")
        default = LightSettings()
        return LightSettings(
            color=_vec3(data.get("color", default.color), "light.color"),
            direction=_vec3(data.get("direction", default.direction), "light.direction"),
        )


def _default_lights() -> List[LightSettings]:
    return [
        LightSettings(color=(0.8, 0.8, 0.8), direction=(50.0, 50.0, 50.0)),
        LightSettings(color=(0.5, 0.5, 0.5), direction=(-50.0, -50.0, 50.0)),
    ]


@dataclass
class SceneConfig:
    lattice_size: int = 3
    lattice_spacing: float = 20.0
    cube_size: float = 10.0
    # Zero-based; 13 is the center of a 3x3x3 lattice.
    selected_index: int = 13
    orbit_damping: float = 5.5
    rotation_frame: RotationFrame = RotationFrame.WORLD
    background_color: Vec3Tuple = (0.9, 0.9, 0.7)
    ambient_color: Vec3Tuple = (0.6, 0.6, 0.6)
    lights: List[LightSettings] = field(default_factory=_default_lights)
    camera: CameraSettings = field(default_factory=CameraSettings)

    @property
    def cube_count(self) -> int:
        return self.lattice_size ** 3

    @property
    def center_index(self) -> int:
        return self.cube_count // 2

    def validate(self) -> "SceneConfig":
        """Raise SceneConfigError on the first invalid value. Returns self."""
        if self.lattice_size < 1 or self.lattice_size % 2 == 0:
            raise SceneConfigError(f"lattice_size must be a positive odd number, got {self.lattice_size}")
        if not self.lattice_spacing > 0:
            raise SceneConfigError(f"lattice_spacing must be positive, got {self.lattice_spacing}")
        if not self.cube_size > 0:
            raise SceneConfigError(f"cube_size must be positive, got {self.cube_size}")
        if not 0 <= self.selected_index < self.cube_count:
            raise SceneConfigError(
                f"selected_index {self.selected_index} out of range [0, {self.cube_count})"
            )
        # The highlighted cube sits at the origin.
        if self.selected_index != self.center_index:
            raise SceneConfigError(
                f"selected_index must be the lattice center {self.center_index}, got {self.selected_index}"
            )
        if not self.orbit_damping > 0:
            raise SceneConfigError(f"orbit_damping must be positive, got {self.orbit_damping}")
        if not isinstance(self.rotation_frame, RotationFrame):
            raise SceneConfigError(f"unknown rotation_frame {self.rotation_frame!r}")
        cam = self.camera
        if not 0 < cam.near < cam.far:
            raise SceneConfigError(f"camera planes must satisfy 0 < near < far, got {cam.near}, {cam.far}")
        if not 0 < cam.fov_y_degrees < 180:
            raise SceneConfigError(f"camera fov must be in (0, 180), got {cam.fov_y_degrees}")
        if not cam.aspect > 0:
            raise SceneConfigError(f"camera aspect must be positive, got {cam.aspect}")
        try:
            Pose3.looking_at(cam.position, cam.target, cam.up)
        except ValueError as e:
            raise SceneConfigError(f"camera: {e}") from None
        return self

    def to_dict(self) -> dict:
        return {
            "lattice_size": self.lattice_size,
            "lattice_spacing": self.lattice_spacing,
            "cube_size": self.cube_size,
            "selected_index": self.selected_index,
            "orbit_damping": self.orbit_damping,
            "rotation_frame": self.rotation_frame.value,
            "background_color": list(self.background_color),
            "ambient_color": list(self.ambient_color),
            "lights": [light.to_dict() for light in self.lights],
            "camera": self.camera.to_dict(),
        }

    @staticmethod
    def from_dict(data: dict) -> "SceneConfig":
        default = SceneConfig()
        frame_str = data.get("rotation_frame", default.rotation_frame.value)
        try:
            frame = RotationFrame(frame_str)
        except ValueError:
            raise SceneConfigError(f"unknown rotation_frame {frame_str!r}") from None

        if "lights" in data:
            if not isinstance(data["lights"], list):
                raise SceneConfigError(f"lights must be a list, got {data['lights']!r}")
            lights = [LightSettings.from_dict(item) for item in data["lights"]]
        else:
            lights = default.lights

        return SceneConfig(
            lattice_size=_number(data, "lattice_size", default.lattice_size, int),
            lattice_spacing=_number(data, "lattice_spacing", default.lattice_spacing, float),
            cube_size=_number(data, "cube_size", default.cube_size, float),
            selected_index=_number(data, "selected_index", default.selected_index, int),
            orbit_damping=_number(data, "orbit_damping", default.orbit_damping, float),
            rotation_frame=frame,
            background_color=_vec3(data.get("background_color", default.background_color), "background_color"),
            ambient_color=_vec3(data.get("ambient_color", default.ambient_color), "ambient_color"),
            lights=lights,
            camera=CameraSettings.from_dict(data.get("camera", {})),
        )

    @staticmethod
    def load(path) -> "SceneConfig":
        """Load and validate a configuration from a JSON file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SceneConfigError(f"cannot read config {path}: {e}") from e
        if not isinstance(data, dict):
            raise SceneConfigError(f"config {path} must contain a JSON object")
        return SceneConfig.from_dict(data).validate()


def _section(value, name: str) -> dict:
    if not isinstance(value, dict):
        raise SceneConfigError(f"{name} must be a JSON object, got {value!r}")
    return value


def _number(data: dict, key: str, default, kind, prefix: str = ""):
    value = data.get(key, default)
    if isinstance(value, bool):
        raise SceneConfigError(f"{prefix}{key} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError, OverflowError):
        raise SceneConfigError(f"{prefix}{key} must be a number, got {value!r}") from None


def _vec3(value, name: str) -> Vec3Tuple:
    try:
        x, y, z = (float(v) for v in value)
    except (TypeError, ValueError):
        raise SceneConfigError(f"{name} must be three numbers, got {value!r}") from None
    if not all(math.isfinite(v) for v in (x, y, z)):
        raise SceneConfigError(f"{name} must be finite, got {value!r}")
    return (x, y, z)
