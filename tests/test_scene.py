"""Scene construction, selection and rotation routing."""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from cubespace.config import RotationFrame, SceneConfig, SceneConfigError
from cubespace.core import Event
from cubespace.visualization import Scene, lattice_position, map_drag


def test_builds_27_cubes_on_lattice():
    scene = Scene.build()
    assert len(scene.cubes) == 27
    positions = {tuple(c.position) for c in scene.cubes}
    assert len(positions) == 27
    for cube in scene.cubes:
        assert set(np.unique(cube.position)).issubset({-20.0, 0.0, 20.0})


def test_lattice_order():
    np.testing.assert_allclose(lattice_position(0, 3, 20.0), [-20.0, -20.0, -20.0])
    np.testing.assert_allclose(lattice_position(1, 3, 20.0), [-20.0, -20.0, 0.0])
    np.testing.assert_allclose(lattice_position(3, 3, 20.0), [-20.0, 0.0, -20.0])
    np.testing.assert_allclose(lattice_position(9, 3, 20.0), [0.0, -20.0, -20.0])
    np.testing.assert_allclose(lattice_position(26, 3, 20.0), [20.0, 20.0, 20.0])


def test_exactly_one_highlighted_cube_at_center():
    scene = Scene.build()
    highlighted = [c for c in scene.cubes if c.highlighted]
    assert len(highlighted) == 1
    assert highlighted[0] is scene.selected_cube
    np.testing.assert_allclose(highlighted[0].position, [0.0, 0.0, 0.0])
    assert highlighted[0].mesh.highlighted
    assert all(not c.mesh.highlighted for c in scene.cubes if not c.highlighted)


def test_meshes_are_shared():
    scene = Scene.build()
    plain = {id(c.mesh) for c in scene.cubes if not c.highlighted}
    assert len(plain) == 1


@pytest.mark.parametrize("index", [-1, 27, 100])
def test_out_of_range_selection_is_fatal(index):
    with pytest.raises(SceneConfigError):
        Scene.build(SceneConfig(selected_index=index))


def test_rotate_selected_only_moves_selected_cube():
    scene = Scene.build()
    before = [c.orientation.copy() for c in scene.cubes]
    camera_before = scene.camera.position.copy()

    assert scene.rotate_selected(map_drag(12, -5))

    for cube, q in zip(scene.cubes, before):
        if cube is scene.selected_cube:
            assert not np.allclose(cube.orientation, q)
        else:
            np.testing.assert_array_equal(cube.orientation, q)
        np.testing.assert_array_equal(cube.position, lattice_position(cube.index, 3, 20.0))
    np.testing.assert_array_equal(scene.camera.position, camera_before)


def test_rotate_selected_uses_world_axis():
    scene = Scene.build()
    scene.rotate_selected(map_drag(0, 30))
    expected = Rotation.from_rotvec(scene.camera.right * np.radians(30.0))
    np.testing.assert_allclose(
        Rotation.from_quat(scene.selected_cube.orientation).as_matrix(), expected.as_matrix(), atol=1e-9
    )


def test_local_frame_uses_raw_screen_axis():
    scene = Scene.build(SceneConfig(rotation_frame=RotationFrame.LOCAL))
    scene.rotate_selected(map_drag(0, 30))
    expected = Rotation.from_rotvec([np.radians(30.0), 0.0, 0.0])
    np.testing.assert_allclose(
        Rotation.from_quat(scene.selected_cube.orientation).as_matrix(), expected.as_matrix(), atol=1e-9
    )


def test_orbit_camera_leaves_cubes_alone():
    scene = Scene.build()
    before = [c.orientation.copy() for c in scene.cubes]
    start = scene.camera.position.copy()

    assert scene.orbit_camera(map_drag(55, 0))

    assert not np.allclose(scene.camera.position, start)
    for cube, q in zip(scene.cubes, before):
        np.testing.assert_array_equal(cube.orientation, q)


def test_orbit_camera_is_damped_and_negated():
    scene = Scene.build()
    start = scene.camera.position.copy()
    scene.orbit_camera(map_drag(55, 0))
    expected = Rotation.from_rotvec(np.array([0.0, -1.0, 0.0]) * np.radians(10.0)).apply(start)
    np.testing.assert_allclose(scene.camera.position, expected, atol=1e-9)


def test_changes_emit_on_changed():
    scene = Scene.build()
    seen = []
    scene.on_changed += seen.append

    scene.rotate_selected(map_drag(3, 0))
    scene.orbit_camera(map_drag(0, 3))
    scene.rotate_selected(map_drag(0, 0))

    assert seen == [scene, scene]


def test_event_subscription():
    event = Event()
    calls = []

    def handler(value):
        calls.append(value)

    event += handler
    event += handler
    assert len(event) == 1
    event.emit(1)
    event -= handler
    event.emit(2)
    assert calls == [1]
    assert not event


class TestDragsAfterCameraOrbit:
    """Cube drags stay about one world axis once the camera has been orbited."""

    @staticmethod
    def _orbited_scene():
        scene = Scene.build()
        scene.orbit_camera(map_drag(40, 25))
        scene.orbit_camera(map_drag(-15, 60))
        scene.rotate_selected(map_drag(30, -70))
        return scene

    @pytest.mark.parametrize("dx,dy,n", [(5, 3, 6), (0, 7, 4), (-8, 0, 5)])
    def test_repeated_drags_match_one_long_drag(self, dx, dy, n):
        repeated = self._orbited_scene()
        single = self._orbited_scene()
        start = Rotation.from_quat(repeated.selected_cube.orientation)

        for _ in range(n):
            repeated.rotate_selected(map_drag(dx, dy))
        single.rotate_selected(map_drag(n * dx, n * dy))

        drag = map_drag(dx, dy)
        world_axis = repeated.camera.view_to_world_rotation() @ drag.axis
        expected = Rotation.from_rotvec(world_axis * np.radians(n * drag.angle)) * start

        result = Rotation.from_quat(repeated.selected_cube.orientation)
        np.testing.assert_allclose(result.as_matrix(), expected.as_matrix(), atol=1e-9)
        np.testing.assert_allclose(
            Rotation.from_quat(single.selected_cube.orientation).as_matrix(), expected.as_matrix(), atol=1e-9
        )

    def test_orbit_changes_world_axis_of_next_drag(self):
        scene = Scene.build()
        scene.orbit_camera(map_drag(165, 0))
        scene.rotate_selected(map_drag(0, 20))
        expected = Rotation.from_rotvec(scene.camera.right * np.radians(20.0))
        np.testing.assert_allclose(
            Rotation.from_quat(scene.selected_cube.orientation).as_matrix(), expected.as_matrix(), atol=1e-9
        )
