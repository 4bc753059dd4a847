"""Слой с рамками вокруг найденных областей."""

from collections.abc import Sequence

import cv2
import numpy as np

from vidfx.messages import Region
from vidfx.overlay.base import Layer
from vidfx.overlay.plugin_registry import register_layer


def draw_region(
    frame: np.ndarray,
    region: Region,
    color: tuple[int, int, int],
    thickness: int,
) -> None:
    """Нарисовать незаполненный прямоугольник области."""
    top_left = (region.x, region.y)
    bottom_right = (region.x + region.width - 1, region.y + region.height - 1)
    cv2.rectangle(frame, top_left, bottom_right, color, thickness)


@register_layer("boxes")
class BoxesLayer(Layer):
    """
    Слой с рамками.

    Рисует прямоугольник вокруг каждой области, ширина которой
    больше min_width.
    """

    def __init__(
        self,
        enabled: bool = True,
        min_width: int = 50,
        scale: float = 1.0,
        color: tuple[int, int, int] = (170, 120, 110),
        thickness: int = 3,
    ) -> None:
        """
        Инициализация слоя рамок.

        Args:
            enabled: Включён ли слой
            min_width: Области уже этого значения пропускаются
            scale: Масштаб координат (если кадр отличается от исходного)
            color: Цвет рамки (BGR)
            thickness: Толщина линии
        """
        super().__init__(enabled)
        self.min_width = min_width
        self.scale = scale
        self.color = tuple(color)
        self.thickness = thickness

    def render(self, frame: np.ndarray, regions: Sequence[Region]) -> None:
        for region in regions:
            if region.width > self.min_width:
                draw_region(frame, region.scaled(self.scale), self.color, self.thickness)
