"""GLFW-based application driver: window, GL context, input translation, render loop."""

from __future__ import annotations

import glfw

from cubespace import log
from cubespace.visualization.platform.base import Action, InputHandler, MouseButton, Renderable


def _ensure_glfw():
    if not glfw.init():
        raise RuntimeError("Failed to initialize GLFW")


def _translate_mouse_button(button: int) -> int:
    """Named buttons become MouseButton; extra buttons (back, forward...) pass through as ints."""
    mapping = {
        glfw.MOUSE_BUTTON_LEFT: MouseButton.LEFT,
        glfw.MOUSE_BUTTON_RIGHT: MouseButton.RIGHT,
        glfw.MOUSE_BUTTON_MIDDLE: MouseButton.MIDDLE,
    }
    return mapping.get(button, int(button))


def _translate_action(action: int) -> Action:
    mapping = {
        glfw.PRESS: Action.PRESS,
        glfw.RELEASE: Action.RELEASE,
        glfw.REPEAT: Action.REPEAT,
    }
    return mapping.get(action, Action.RELEASE)


class GLFWApplication:
    """
    Drives a Renderable and an InputHandler from a GLFW window.

    Rendering is on demand: request_redraw() marks the next loop iteration to
    draw a frame, otherwise the loop sleeps in glfw.wait_events(). All
    callbacks run on the thread that calls run().
    """

    def __init__(
        self,
        renderable: Renderable,
        input_handler: InputHandler,
        width: int = 960,
        height: int = 640,
        title: str = "cubespace",
    ):
        self.renderable = renderable
        self.input_handler = input_handler
        self.width = width
        self.height = height
        self.title = title
        self._window = None
        self._redraw_requested = True
        self._last_time = 0.0
        self._buttons_down = 0

    def request_redraw(self, *_args):
        self._redraw_requested = True

    def _create_window(self):
        _ensure_glfw()
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)
        glfw.window_hint(glfw.RESIZABLE, glfw.TRUE)

        self._window = glfw.create_window(self.width, self.height, self.title, None, None)
        if not self._window:
            glfw.terminate()
            raise RuntimeError("Failed to create GLFW window")
        glfw.make_context_current(self._window)
        glfw.swap_interval(1)

        glfw.set_mouse_button_callback(self._window, self._on_mouse_button)
        glfw.set_cursor_pos_callback(self._window, self._on_cursor_pos)
        glfw.set_framebuffer_size_callback(self._window, self._on_framebuffer_size)
        glfw.set_window_iconify_callback(self._window, self._on_iconify)
        glfw.set_window_refresh_callback(self._window, lambda _win: self.request_redraw())

    # --- Callbacks ---

    def _on_mouse_button(self, window, button, action, mods):
        x, y = glfw.get_cursor_pos(window)
        button = _translate_mouse_button(button)
        action = _translate_action(action)
        if action == Action.PRESS:
            self._buttons_down += 1
            self.input_handler.pointer_down(int(x), int(y), 0, button)
        elif action == Action.RELEASE:
            self._buttons_down = max(0, self._buttons_down - 1)
            self.input_handler.pointer_up(int(x), int(y), 0, button)

    def _on_cursor_pos(self, window, x, y):
        if self._buttons_down:
            self.input_handler.pointer_dragged(int(x), int(y), 0)

    def _on_framebuffer_size(self, window, width, height):
        self.renderable.resize(width, height)
        self.request_redraw()

    def _on_iconify(self, window, iconified):
        if iconified:
            self.renderable.pause()
        else:
            self.renderable.resume()
            self.request_redraw()

    # --- Loop ---

    def run(self):
        self.renderable.create()
        self._create_window()
        try:
            self.renderable.show()
            width, height = glfw.get_framebuffer_size(self._window)
            self.renderable.resize(width, height)
            self._last_time = glfw.get_time()

            while not glfw.window_should_close(self._window):
                if self._redraw_requested:
                    self._redraw_requested = False
                    now = glfw.get_time()
                    self.renderable.render(now - self._last_time)
                    self._last_time = now
                    glfw.swap_buffers(self._window)
                glfw.wait_events()
        finally:
            try:
                self.renderable.dispose()
            except Exception as e:
                log.error(e, "[GLFWApplication] dispose failed")
            glfw.destroy_window(self._window)
            self._window = None
            glfw.terminate()
