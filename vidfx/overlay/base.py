"""Базовые интерфейсы для системы оверлеев."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol

import numpy as np

from vidfx.messages import Region


class OverlayRenderer(Protocol):
    """
    Интерфейс рендерера оверлеев.

    Рендерер управляет отрисовкой всех слоёв на кадре.
    """

    def draw(self, frame: np.ndarray, regions: Sequence[Region]) -> None:
        """
        Отрисовать все слои на кадре.

        Args:
            frame: Кадр в формате BGR (numpy array)
            regions: Найденные области в координатах исходного кадра
        """
        ...


class Layer(ABC):
    """
    Базовый класс для слоя оверлея.

    Каждый слой отвечает за отрисовку одного вида аннотации над
    найденными областями (рамки, сердечки и т.д.).

    Атрибуты приоритета определяют порядок отрисовки слоев:
    - PRIORITY_BACKGROUND (0): Фоновые элементы
    - PRIORITY_NORMAL (50): Обычные графические элементы
    - PRIORITY_FOREGROUND (100): Передний план, декорации

    Слои с меньшим приоритетом рисуются раньше (снизу),
    с большим - позже (сверху).
    """

    # Константы приоритетов
    PRIORITY_BACKGROUND = 0
    PRIORITY_NORMAL = 50
    PRIORITY_FOREGROUND = 100

    # Имя в реестре, проставляется декоратором register_layer
    plugin_name: str = ""

    def __init__(self, enabled: bool = True, priority: int = PRIORITY_NORMAL) -> None:
        """
        Инициализация слоя.

        Args:
            enabled: Включён ли слой
            priority: Приоритет отрисовки (меньше = раньше)
        """
        self.enabled = enabled
        self.priority = priority

    @abstractmethod
    def render(self, frame: np.ndarray, regions: Sequence[Region]) -> None:
        """
        Отрисовать слой на кадре.

        Args:
            frame: Кадр в формате BGR (numpy array), модифицируется на месте
            regions: Найденные области
        """
        ...
