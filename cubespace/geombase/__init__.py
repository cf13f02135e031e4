"""
Базовые геометрические классы (Geometric Base).

- Pose3 - поза (ориентация + положение + масштаб) в 3D пространстве
"""

from .pose3 import Pose3

__all__ = [
    'Pose3',
]
