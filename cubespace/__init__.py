"""
cubespace - сетка кубиков с вращением мышью.

Основные модули:
- geombase - поза (Pose3) на numpy
- mesh - геометрия кубика
- visualization - камера, сцена, отображение перетаскивания в поворот
"""

from .geombase import Pose3

__version__ = '0.1.0'

__all__ = [
    'Pose3',
]
