from cubespace.visualization.platform.base import Action, InputHandler, MouseButton, Renderable

__all__ = [
    "Action",
    "InputHandler",
    "MouseButton",
    "Renderable",
]
