"""The cube-grid application: scene + input controller + renderer behind the driver interfaces."""

from __future__ import annotations

from typing import Optional

from cubespace import log
from cubespace.config import SceneConfig
from cubespace.visualization.controller import SceneInputController
from cubespace.visualization.platform.base import Renderable
from cubespace.visualization.scene import Scene


class CubeSpaceApp(Renderable):
    def __init__(self, config: Optional[SceneConfig] = None):
        self.config = config if config is not None else SceneConfig()
        self.scene: Optional[Scene] = None
        self.controller: Optional[SceneInputController] = None
        self.renderer = None
        self.paused = False

    def create(self) -> None:
        if self.scene is not None:
            return
        self.scene = Scene.build(self.config)
        self.controller = SceneInputController(self.scene)
        log.info(
            f"[CubeSpaceApp] {len(self.scene.cubes)} cubes, selected {self.scene.selected_index}, "
            f"rotation frame {self.config.rotation_frame.value}"
        )

    def show(self) -> None:
        # GL is imported only once a context exists.
        from cubespace.visualization.render import SceneRenderer

        self.renderer = SceneRenderer()
        self.renderer.init_gl(self.scene)

    def render(self, delta: float) -> None:
        if self.renderer is None or self.paused:
            return
        self.renderer.render(self.scene)

    def resize(self, width: int, height: int) -> None:
        if height > 0:
            self.scene.camera.set_aspect(width / height)
        if self.renderer is not None:
            self.renderer.resize(width, height)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def dispose(self) -> None:
        if self.renderer is not None:
            self.renderer.dispose()
            self.renderer = None


def run(config: Optional[SceneConfig] = None, width: int = 960, height: int = 640, title: str = "cubespace"):
    from cubespace.visualization.platform.glfw_backend import GLFWApplication

    app = CubeSpaceApp(config)
    app.create()
    driver = GLFWApplication(app, app.controller, width=width, height=height, title=title)
    app.scene.on_changed += driver.request_redraw
    driver.run()
