"""Фильтры окрестности: размытие, Собель, градиент, постеризация, тиснение."""

import cv2
import numpy as np

from vidfx.filters.base import (
    BLUR_1X5,
    BLUR_5X5,
    SOBEL_DERIVATIVE,
    SOBEL_DERIVATIVE_Y,
    SOBEL_SMOOTHING,
    FilterError,
    Kernel,
    clamp_u8,
    ensure_frame,
)

BLUR_BORDER = 2

_INT16_MIN = np.iinfo(np.int16).min
_INT16_MAX = np.iinfo(np.int16).max


def _window(values: np.ndarray, start: int, length: int, axis: int) -> np.ndarray:
    if axis == 0:
        return values[start : start + length]
    return values[:, start : start + length]


def correlate_axis(values: np.ndarray, kernel: Kernel, axis: int) -> np.ndarray:
    """
    Взвешенная сумма 1-D ядра вдоль оси только по «валидной» области.

    Результат короче входа на 2 * radius вдоль axis. Деление на
    kernel.divisor не выполняется.

    Args:
        values: Массив (H, W) или (H, W, C), целочисленный
        kernel: 1-D ядро
        axis: 0 - по столбцам (вертикально), 1 - по строкам (горизонтально)

    Returns:
        int32 массив с накопленными суммами
    """
    weights = kernel.as_array()
    if weights.ndim != 1:
        raise ValueError("correlate_axis expects a 1-D kernel")

    length = values.shape[axis] - weights.size + 1
    shape = list(values.shape)
    shape[axis] = length
    acc = np.zeros(shape, dtype=np.int32)
    for offset, weight in enumerate(weights):
        if weight:
            acc += int(weight) * _window(values, offset, length, axis).astype(np.int32)
    return acc


def blur5x5_direct(frame: np.ndarray) -> np.ndarray:
    """
    Прямое 2-D размытие ядром 5x5 (BLUR_5X5).

    Обрабатываются только внутренние пиксели, рамка в 2 пикселя
    копируется из исходного кадра.

    Args:
        frame: Кадр (H, W) или (H, W, C), uint8

    Returns:
        Кадр той же формы, uint8
    """
    ensure_frame(frame)
    out = frame.copy()
    height, width = frame.shape[:2]
    size = 2 * BLUR_BORDER + 1
    if height < size or width < size:
        return out

    weights = BLUR_5X5.as_array()
    inner_h, inner_w = height - size + 1, width - size + 1
    src = frame.astype(np.int32)
    acc = np.zeros((inner_h, inner_w) + frame.shape[2:], dtype=np.int32)
    for ky in range(size):
        for kx in range(size):
            acc += int(weights[ky, kx]) * src[ky : ky + inner_h, kx : kx + inner_w]

    out[BLUR_BORDER:-BLUR_BORDER, BLUR_BORDER:-BLUR_BORDER] = clamp_u8(acc // BLUR_5X5.divisor)
    return out


def blur5x5_separable(frame: np.ndarray) -> np.ndarray:
    """
    Сепарабельное размытие: 1x5 по строкам, затем 1x5 по столбцам.

    Между проходами значения хранятся в рабочем буфере, ограниченном
    [0, 255]. Рамка в 2 пикселя копируется из исходного кадра.

    Args:
        frame: Кадр (H, W) или (H, W, C), uint8

    Returns:
        Кадр той же формы, uint8
    """
    ensure_frame(frame)
    out = frame.copy()
    height, width = frame.shape[:2]
    size = 2 * BLUR_BORDER + 1
    if height < size or width < size:
        return out

    # Floor и усечение к нулю расходятся только для отрицательных сумм,
    # которые всё равно ограничиваются нулём
    rows = clamp_u8(correlate_axis(frame, BLUR_1X5, axis=1) // BLUR_1X5.divisor)
    cols = correlate_axis(rows, BLUR_1X5, axis=0) // BLUR_1X5.divisor

    out[BLUR_BORDER:-BLUR_BORDER, BLUR_BORDER:-BLUR_BORDER] = clamp_u8(cols)
    return out


def _sobel(frame: np.ndarray, horizontal: Kernel, vertical: Kernel) -> np.ndarray:
    ensure_frame(frame)
    out = np.zeros(frame.shape, dtype=np.int16)
    height, width = frame.shape[:2]
    if height < 3 or width < 3:
        return out

    rows = correlate_axis(frame, horizontal, axis=1)
    acc = correlate_axis(rows, vertical, axis=0)
    out[1:-1, 1:-1] = np.clip(acc, _INT16_MIN, _INT16_MAX).astype(np.int16)
    return out


def sobel_x(frame: np.ndarray) -> np.ndarray:
    """
    Горизонтальный градиент Собеля 3x3.

    Производная {-1, 0, 1} по строкам, сглаживание {1, 2, 1} по столбцам.

    Args:
        frame: Кадр (H, W) или (H, W, C), uint8

    Returns:
        int16 массив той же формы, первая/последняя строка и столбец нулевые
    """
    return _sobel(frame, SOBEL_DERIVATIVE, SOBEL_SMOOTHING)


def sobel_y(frame: np.ndarray) -> np.ndarray:
    """
    Вертикальный градиент Собеля 3x3.

    Сглаживание {1, 2, 1} по строкам, производная {1, 0, -1} по столбцам
    (положителен, когда сверху ярче).

    Args:
        frame: Кадр (H, W) или (H, W, C), uint8

    Returns:
        int16 массив той же формы, первая/последняя строка и столбец нулевые
    """
    return _sobel(frame, SOBEL_SMOOTHING, SOBEL_DERIVATIVE_Y)


def gradient_magnitude(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """
    Евклидова величина градиента по каналам: sqrt(gx^2 + gy^2).

    Args:
        gx: Результат sobel_x, int16
        gy: Результат sobel_y той же формы, int16

    Returns:
        float32 массив той же формы, значения в [0, 255]
    """
    ensure_frame(gx)
    ensure_frame(gy)
    if gx.shape != gy.shape:
        raise FilterError(f"Gradient shapes differ: {gx.shape} vs {gy.shape}")

    fx = gx.astype(np.float32)
    fy = gy.astype(np.float32)
    return np.clip(np.sqrt(fx * fx + fy * fy), 0.0, 255.0).astype(np.float32)


def blur_quantize(frame: np.ndarray, levels: int = 10) -> np.ndarray:
    """
    Постеризация: гауссово размытие 5x5, затем квантование каналов.

    value -> floor(value / bucket + 0.5) * bucket, bucket = 255 / levels.

    Args:
        frame: Кадр (H, W) или (H, W, C), uint8
        levels: Число уровней на канал

    Returns:
        Кадр той же формы, uint8
    """
    ensure_frame(frame)
    if levels < 1:
        raise FilterError(f"Quantize levels must be >= 1, got {levels}")

    blurred = cv2.GaussianBlur(frame, (5, 5), 0)
    bucket = 255.0 / levels
    quantized = np.floor(blurred.astype(np.float64) / bucket + 0.5) * bucket
    return clamp_u8(quantized)


def emboss(frame: np.ndarray) -> np.ndarray:
    """
    Тиснение: |gx| + |gy| по каналам, ограничено 255.

    Returns:
        int16 массив той же формы, что и frame
    """
    gx = sobel_x(frame).astype(np.int32)
    gy = sobel_y(frame).astype(np.int32)
    return np.minimum(np.abs(gx) + np.abs(gy), 255).astype(np.int16)
