"""OpenCV рендерер оверлеев."""

from collections.abc import Sequence

import numpy as np

from vidfx.messages import Region
from vidfx.overlay.base import Layer


class CvOverlayRenderer:
    """
    Рендерер оверлеев на основе OpenCV.

    Управляет отрисовкой всех слоёв на кадре с использованием OpenCV.
    """

    def __init__(self, layers: list[Layer]) -> None:
        """
        Инициализация рендерера.

        Args:
            layers: Список слоёв для отрисовки
        """
        # Сортируем слои по приоритету (меньше = рисуется раньше)
        self.layers = sorted(layers, key=lambda layer: layer.priority)

    def draw(self, frame: np.ndarray, regions: Sequence[Region]) -> None:
        """
        Отрисовать все активные слои на кадре.

        Args:
            frame: Кадр в формате BGR (numpy array), модифицируется на месте
            regions: Найденные области
        """
        for layer in self.layers:
            if layer.enabled:
                layer.render(frame, regions)
