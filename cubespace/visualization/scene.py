"""Scene aggregate: lattice of cubes, camera, and change notification."""

from __future__ import annotations

from typing import List

import numpy as np

from cubespace import log
from cubespace.config import RotationFrame, SceneConfig
from cubespace.core.event import Event
from cubespace.mesh import CubeMesh, build_cube
from cubespace.visualization.camera import OrbitCamera
from cubespace.visualization.drag_rotation import DragRotation
from cubespace.visualization.orientable import OrientableObject


class Cube(OrientableObject):
    """One lattice cube. Position and mesh are fixed; only the rotation changes."""

    def __init__(
        self,
        index: int,
        position,
        mesh: CubeMesh,
        highlighted: bool,
        frame: RotationFrame = RotationFrame.WORLD,
    ):
        super().__init__(position=position, frame=frame)
        self.index = index
        self.mesh = mesh
        self.highlighted = highlighted

    def __repr__(self):
        return f"Cube(index={self.index}, position={self.position.tolist()}, highlighted={self.highlighted})"


def lattice_position(index: int, size: int, spacing: float) -> np.ndarray:
    """Position of cube `index` on a size^3 lattice centered at the origin."""
    cell = np.array([index // (size * size), (index % (size * size)) // size, index % size], dtype=float)
    return cell * spacing - spacing * (size - 1) / 2.0


class Scene:
    """
    Owns the cubes and the camera. Input handlers and the renderer receive the
    scene by reference; nothing else holds scene state.

    on_changed fires after any cube or camera motion. Listeners use it to
    request a redraw; several changes may be folded into one frame.
    """

    def __init__(self, config: SceneConfig, cubes: List[Cube], camera: OrbitCamera):
        self.config = config
        self.cubes = cubes
        self.camera = camera
        self.selected_index = config.selected_index
        self.on_changed: Event[Scene] = Event()

    @staticmethod
    def build(config: SceneConfig = None) -> "Scene":
        if config is None:
            config = SceneConfig()
        config.validate()

        highlighted_mesh = build_cube(True, config.cube_size)
        plain_mesh = build_cube(False, config.cube_size)

        cubes = []
        for i in range(config.cube_count):
            selected = i == config.selected_index
            cubes.append(Cube(
                index=i,
                position=lattice_position(i, config.lattice_size, config.lattice_spacing),
                mesh=highlighted_mesh if selected else plain_mesh,
                highlighted=selected,
                frame=config.rotation_frame,
            ))

        camera = OrbitCamera.from_settings(config.camera)
        log.debug(f"[Scene] built {len(cubes)} cubes, selected {config.selected_index}")
        return Scene(config, cubes, camera)

    @property
    def selected_cube(self) -> Cube:
        return self.cubes[self.selected_index]

    def rotate_selected(self, rotation: DragRotation) -> bool:
        """Spin the selected cube by a camera-space drag rotation."""
        cube = self.selected_cube
        # LOCAL keeps the raw screen axis and applies it in the cube frame.
        if cube.frame is RotationFrame.WORLD:
            rotation = rotation.to_world(self.camera)
        moved = cube.rotate(rotation.axis, rotation.angle)
        if moved:
            self.on_changed.emit(self)
        return moved

    def orbit_camera(self, rotation: DragRotation) -> bool:
        """Orbit the camera around the configured target by a drag rotation."""
        orbit = rotation.for_orbit(self.config.orbit_damping)
        moved = self.camera.orbit_around(self.config.camera.target, orbit.axis, orbit.angle)
        if moved:
            self.on_changed.emit(self)
        return moved
