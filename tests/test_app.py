"""Command line, application lifecycle and driver callbacks without a window."""

import json

import numpy as np
import pytest

from cubespace.__main__ import build_parser, load_config, main
from cubespace.app import CubeSpaceApp
from cubespace.config import RotationFrame, SceneConfig
from cubespace.visualization.platform import InputHandler, MouseButton, Renderable


class TestCommandLine:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.rotation_frame is None
        assert (args.width, args.height) == (960, 640)
        assert args.log_level == "info"
        assert load_config(args) == SceneConfig()

    def test_rotation_frame_override(self):
        args = build_parser().parse_args(["--rotation-frame", "local"])
        assert load_config(args).rotation_frame is RotationFrame.LOCAL

    def test_config_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({"orbit_damping": 2.0, "rotation_frame": "local"}), encoding="utf-8")
        args = build_parser().parse_args(["-c", str(path), "--rotation-frame", "world"])
        config = load_config(args)
        assert config.orbit_damping == 2.0
        assert config.rotation_frame is RotationFrame.WORLD

    def test_unknown_frame_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--rotation-frame", "sideways"])

    def test_invalid_config_exits_with_status_2(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({"selected_index": 27}), encoding="utf-8")
        with pytest.raises(SystemExit) as info:
            main(["--config", str(path), "--log-level", "error"])
        assert info.value.code == 2

    @pytest.mark.parametrize("data", [
        {"lattice_size": "three"},
        {"camera": [1, 2, 3]},
        {"lights": [5]},
        {"camera": {"position": [0, 0, 0]}},
        {"camera": {"position": [0, 40, 0], "up": [0, 1, 0]}},
        {"selected_index": 4},
    ])
    def test_bad_config_values_exit_with_status_2(self, tmp_path, data):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(SystemExit) as info:
            main(["--config", str(path), "--log-level", "error"])
        assert info.value.code == 2

    def test_malformed_json_exits_with_status_2(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SystemExit) as info:
            main(["--config", str(path), "--log-level", "error"])
        assert info.value.code == 2


class TestCubeSpaceApp:
    def test_create_builds_scene_and_controller(self):
        app = CubeSpaceApp()
        app.create()
        assert len(app.scene.cubes) == 27
        assert app.controller.scene is app.scene

        scene = app.scene
        app.create()
        assert app.scene is scene

    def test_resize_updates_camera_aspect(self):
        app = CubeSpaceApp()
        app.create()
        app.resize(800, 400)
        proj = app.scene.camera.projection_matrix()
        assert proj[0, 0] == pytest.approx(proj[1, 1] / 2.0)

    def test_resize_ignores_zero_height(self):
        app = CubeSpaceApp()
        app.create()
        before = app.scene.camera.projection_matrix().copy()
        app.resize(800, 0)
        np.testing.assert_array_equal(app.scene.camera.projection_matrix(), before)

    def test_render_without_renderer_is_noop(self):
        app = CubeSpaceApp()
        app.create()
        app.pause()
        assert app.paused
        app.render(0.016)
        app.resume()
        assert not app.paused
        app.render(0.016)
        app.dispose()


class RecordingRenderable(Renderable):
    def __init__(self):
        self.calls = []

    def render(self, delta):
        self.calls.append(("render", delta))

    def resize(self, width, height):
        self.calls.append(("resize", width, height))

    def pause(self):
        self.calls.append(("pause",))

    def resume(self):
        self.calls.append(("resume",))


class RecordingHandler(InputHandler):
    def __init__(self):
        self.calls = []

    def pointer_down(self, x, y, pointer, button):
        self.calls.append(("down", x, y, button))
        return True

    def pointer_dragged(self, x, y, pointer):
        self.calls.append(("drag", x, y))
        return True

    def pointer_up(self, x, y, pointer, button):
        self.calls.append(("up", x, y, button))
        return True


class TestGLFWCallbacks:
    @pytest.fixture
    def driver(self, monkeypatch):
        glfw = pytest.importorskip("glfw")
        from cubespace.visualization.platform.glfw_backend import GLFWApplication

        cursor = {"pos": (0.0, 0.0)}
        monkeypatch.setattr(glfw, "get_cursor_pos", lambda window: cursor["pos"])
        app = GLFWApplication(RecordingRenderable(), RecordingHandler())
        app.cursor = cursor
        return app

    def test_motion_without_button_is_not_a_drag(self, driver):
        driver._on_cursor_pos(None, 10.0, 10.0)
        assert driver.input_handler.calls == []

    def test_press_drag_release(self, driver):
        import glfw

        driver.cursor["pos"] = (10.4, 20.7)
        driver._on_mouse_button(None, glfw.MOUSE_BUTTON_RIGHT, glfw.PRESS, 0)
        driver._on_cursor_pos(None, 15.0, 22.0)
        driver.cursor["pos"] = (15.0, 22.0)
        driver._on_mouse_button(None, glfw.MOUSE_BUTTON_RIGHT, glfw.RELEASE, 0)
        driver._on_cursor_pos(None, 40.0, 40.0)

        assert driver.input_handler.calls == [
            ("down", 10, 20, MouseButton.RIGHT),
            ("drag", 15, 22),
            ("up", 15, 22, MouseButton.RIGHT),
        ]

    def test_named_buttons_translate(self):
        glfw = pytest.importorskip("glfw")
        from cubespace.visualization.platform.glfw_backend import _translate_mouse_button

        assert _translate_mouse_button(glfw.MOUSE_BUTTON_LEFT) is MouseButton.LEFT
        assert _translate_mouse_button(glfw.MOUSE_BUTTON_RIGHT) is MouseButton.RIGHT
        assert _translate_mouse_button(glfw.MOUSE_BUTTON_MIDDLE) is MouseButton.MIDDLE

    @pytest.mark.parametrize("button", [3, 4, 7])
    def test_extra_buttons_are_not_primary(self, button):
        pytest.importorskip("glfw")
        from cubespace.visualization.platform.glfw_backend import _translate_mouse_button

        assert _translate_mouse_button(button) == button
        assert _translate_mouse_button(button) != MouseButton.PRIMARY

    def test_extra_button_drag_orbits_camera(self, monkeypatch):
        glfw = pytest.importorskip("glfw")
        from cubespace.visualization import Scene, SceneInputController
        from cubespace.visualization.platform.glfw_backend import GLFWApplication

        scene = Scene.build()
        cube_start = scene.selected_cube.orientation.copy()
        camera_start = scene.camera.position.copy()
        app = GLFWApplication(RecordingRenderable(), SceneInputController(scene))

        monkeypatch.setattr(glfw, "get_cursor_pos", lambda window: (100.0, 100.0))
        app._on_mouse_button(None, glfw.MOUSE_BUTTON_4, glfw.PRESS, 0)
        app._on_cursor_pos(None, 130.0, 100.0)

        np.testing.assert_array_equal(scene.selected_cube.orientation, cube_start)
        assert not np.allclose(scene.camera.position, camera_start)

    def test_iconify_pauses_and_resumes(self, driver):
        driver._redraw_requested = False
        driver._on_iconify(None, True)
        driver._on_iconify(None, False)
        assert driver.renderable.calls == [("pause",), ("resume",)]
        assert driver._redraw_requested

    def test_framebuffer_resize_requests_redraw(self, driver):
        driver._redraw_requested = False
        driver._on_framebuffer_size(None, 640, 480)
        assert driver.renderable.calls == [("resize", 640, 480)]
        assert driver._redraw_requested

    def test_scene_change_requests_redraw(self, driver):
        from cubespace.visualization import Scene, map_drag

        scene = Scene.build()
        scene.on_changed += driver.request_redraw
        driver._redraw_requested = False
        scene.rotate_selected(map_drag(4, 0))
        assert driver._redraw_requested
