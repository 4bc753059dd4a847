"""Базовые типы библиотеки фильтров."""

from dataclasses import dataclass

import numpy as np


class FilterError(ValueError):
    """Фильтр получил пустой или некорректный кадр."""


@dataclass(frozen=True)
class Kernel:
    """
    Неизменяемое ядро свёртки.

    Атрибуты:
        weights: Веса (1-D кортеж или 2-D кортеж кортежей), длины нечётные
        divisor: Нормирующий делитель (1 для ядер без нормировки)
    """

    weights: tuple
    divisor: int = 1

    def __post_init__(self) -> None:
        array = self.as_array()
        if array.ndim not in (1, 2) or any(size % 2 == 0 for size in array.shape):
            raise ValueError(f"Kernel must be 1-D or 2-D with odd sizes, got {array.shape}")
        if self.divisor == 0:
            raise ValueError("Kernel divisor must be non-zero")

    def as_array(self) -> np.ndarray:
        return np.array(self.weights, dtype=np.int32)

    @property
    def radius(self) -> int:
        return self.as_array().shape[0] // 2


# Прямое размытие 5x5: делитель равен сумме весов
BLUR_5X5 = Kernel(
    (
        (1, 2, 4, 2, 1),
        (2, 4, 8, 4, 2),
        (4, 8, 16, 8, 4),
        (2, 4, 8, 4, 2),
        (1, 2, 4, 2, 1),
    ),
    divisor=100,
)

# Сепарабельное 1x5 (применяется по строкам, затем по столбцам)
BLUR_1X5 = Kernel((-5, 0, 20, 0, -5), divisor=10)

SOBEL_DERIVATIVE = Kernel((-1, 0, 1))
SOBEL_DERIVATIVE_Y = Kernel((1, 0, -1))
SOBEL_SMOOTHING = Kernel((1, 2, 1))


def ensure_frame(frame: np.ndarray | None, color: bool = False) -> np.ndarray:
    """
    Проверить входной кадр.

    Args:
        frame: Кадр (H, W) или (H, W, C)
        color: Требовать трёхканальный кадр

    Returns:
        Тот же кадр

    Raises:
        FilterError: Если кадр пустой или имеет неподходящую форму
    """
    if frame is None or frame.size == 0:
        raise FilterError("Empty input frame")
    if frame.ndim not in (2, 3):
        raise FilterError(f"Expected 2-D or 3-D frame, got shape {frame.shape}")
    if color and (frame.ndim != 3 or frame.shape[2] != 3):
        raise FilterError(f"Expected 3-channel frame, got shape {frame.shape}")
    return frame


def clamp_u8(values: np.ndarray) -> np.ndarray:
    """Ограничить [0, 255] и только потом привести к uint8."""
    return np.clip(values, 0, 255).astype(np.uint8)
