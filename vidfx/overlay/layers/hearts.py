"""Слой с сердечками над найденными лицами."""

import time
from collections.abc import Sequence

import cv2
import numpy as np

from vidfx.messages import Region
from vidfx.overlay.base import Layer
from vidfx.overlay.layers.boxes import draw_region
from vidfx.overlay.plugin_registry import register_layer


def draw_heart(
    img: np.ndarray,
    center: tuple[int, int],
    size: int,
    color: tuple[int, int, int] = (0, 0, 255),
) -> None:
    """
    Нарисовать закрашенное сердечко.

    Сердечко собирается из двух верхних полуэллипсов (доли) и
    треугольника, направленного вниз. Рисунок занимает примерно
    квадрат size x size с центром в center.

    Args:
        img: Кадр, модифицируется на месте
        center: Центр сердечка (x, y)
        size: Ширина сердечка в пикселях
        color: Цвет заливки (BGR)
    """
    cx, cy = center
    lobe = max(size // 4, 1)
    # Радиус доли больше расстояния от центра доли до cx: доли перекрываются
    radius = lobe + max(lobe // 4, 1)
    half = max(size // 2, 1)

    cv2.ellipse(img, (cx - lobe, cy), (radius, radius), 0, 180, 360, color, -1, cv2.LINE_8)
    cv2.ellipse(img, (cx + lobe, cy), (radius, radius), 0, 180, 360, color, -1, cv2.LINE_8)

    triangle = np.array([(cx - half, cy), (cx + half, cy), (cx, cy + half)], dtype=np.int32)
    cv2.fillPoly(img, [triangle], color, cv2.LINE_8)


@register_layer("hearts")
class HeartsLayer(Layer):
    """
    Слой с сердечками.

    Обводит каждую подходящую область рамкой и рисует над ней
    несколько сердечек случайного размера в случайных местах.
    """

    def __init__(
        self,
        enabled: bool = True,
        min_width: int = 0,
        scale: float = 1.0,
        count: int = 5,
        min_size: int = 20,
        max_size: int = 50,
        heart_color: tuple[int, int, int] = (0, 0, 255),
        box_color: tuple[int, int, int] = (170, 120, 110),
        box_thickness: int = 3,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Инициализация слоя сердечек.

        Args:
            enabled: Включён ли слой
            min_width: Области уже этого значения пропускаются
            scale: Масштаб координат
            count: Число сердечек над каждой областью
            min_size: Минимальный размер сердечка (включительно)
            max_size: Максимальный размер сердечка (не включительно)
            heart_color: Цвет сердечек (BGR)
            box_color: Цвет рамки (BGR)
            box_thickness: Толщина рамки
            rng: Генератор случайных чисел; по умолчанию засевается текущим временем
        """
        super().__init__(enabled, priority=Layer.PRIORITY_FOREGROUND)
        if not 0 < min_size < max_size:
            raise ValueError(f"Invalid heart size range [{min_size}, {max_size})")
        self.min_width = min_width
        self.scale = scale
        self.count = count
        self.min_size = min_size
        self.max_size = max_size
        self.heart_color = tuple(heart_color)
        self.box_color = tuple(box_color)
        self.box_thickness = box_thickness
        self.rng = rng if rng is not None else np.random.default_rng(int(time.time()))

    def render(self, frame: np.ndarray, regions: Sequence[Region]) -> None:
        for region in regions:
            if region.width <= self.min_width:
                continue

            face = region.scaled(self.scale)
            draw_region(frame, face, self.box_color, self.box_thickness)

            for _ in range(self.count):
                size = int(self.rng.integers(self.min_size, self.max_size))
                # Левый верхний угол сердечка: в пределах ширины лица, выше него
                x = face.x + int(self.rng.integers(0, max(face.width - size, 1)))
                y = face.y - size - int(self.rng.integers(0, 2 * size))
                draw_heart(frame, (x + size // 2, y + size // 2), size, self.heart_color)
