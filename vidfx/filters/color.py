"""Попиксельные фильтры: оттенки серого, сепия, виньетка, яркость, хромакей."""

import cv2
import numpy as np

from vidfx.filters.base import FilterError, clamp_u8, ensure_frame

# Строки: каналы B, G, R на выходе; столбцы: вклад R, G, B
SEPIA_MATRIX = np.array(
    [
        [0.272, 0.534, 0.131],
        [0.349, 0.686, 0.168],
        [0.393, 0.769, 0.189],
    ],
    dtype=np.float64,
)


def grayscale(frame: np.ndarray) -> np.ndarray:
    """
    Стандартное преобразование в оттенки серого.

    Args:
        frame: Кадр BGR (H, W, 3), uint8

    Returns:
        Одноканальный кадр (H, W), uint8
    """
    ensure_frame(frame, color=True)
    return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)


def alt_grayscale(frame: np.ndarray) -> np.ndarray:
    """
    Альтернативный серый: 255 - R во всех трёх каналах.

    Args:
        frame: Кадр BGR (H, W, 3), uint8

    Returns:
        Кадр BGR (H, W, 3), uint8
    """
    ensure_frame(frame, color=True)
    inverted = 255 - frame[:, :, 2]
    return np.repeat(inverted[:, :, np.newaxis], 3, axis=2)


def tone_map(frame: np.ndarray, matrix: np.ndarray = SEPIA_MATRIX) -> np.ndarray:
    """
    Тонирование линейной матрицей смешивания цветов (по умолчанию сепия).

    Args:
        frame: Кадр BGR (H, W, 3), uint8
        matrix: Матрица 3x3, применяемая к вектору (R, G, B); строка i
            записывается в канал i кадра BGR

    Returns:
        Кадр BGR (H, W, 3), uint8, каждый канал ограничен [0, 255]
    """
    ensure_frame(frame, color=True)
    rgb = frame[:, :, ::-1].astype(np.float64)
    mixed = rgb @ np.asarray(matrix, dtype=np.float64).T
    return clamp_u8(mixed)


def vignette(frame: np.ndarray, strength: float = 0.8, radius: float = 0.7) -> np.ndarray:
    """
    Радиальное затемнение к краям кадра.

    Множитель: 1 - strength * (1 - exp(-0.5 * (d / radius)^2)), где d -
    расстояние до центра, нормированное на расстояние от центра до угла.

    Args:
        frame: Кадр (H, W) или (H, W, C), uint8
        strength: Сила эффекта
        radius: Радиус спада

    Returns:
        Кадр той же формы; пустой кадр возвращается без изменений
    """
    if frame is None or frame.size == 0:
        return frame
    if radius <= 0:
        raise FilterError(f"Vignette radius must be positive, got {radius}")

    height, width = frame.shape[:2]
    center_x, center_y = width // 2, height // 2
    norm = max(float(np.hypot(center_x, center_y)), 1.0)

    ys, xs = np.ogrid[:height, :width]
    distance = np.hypot(xs - center_x, ys - center_y) / norm
    falloff = 1.0 - strength * (1.0 - np.exp(-0.5 * (distance / radius) ** 2))

    if frame.ndim == 3:
        falloff = falloff[:, :, np.newaxis]
    return clamp_u8(frame * falloff)


def strong_color(frame: np.ndarray, threshold: int = 128) -> np.ndarray:
    """
    Оставить цвет только у ярких пикселей.

    Пиксели со средней яркостью выше порога сохраняют исходный цвет,
    остальные заменяются серым значением этой яркости.
    """
    ensure_frame(frame, color=True)
    intensity = frame.astype(np.int32).sum(axis=2) // 3
    keep = intensity > threshold
    grey = np.repeat(intensity.astype(np.uint8)[:, :, np.newaxis], 3, axis=2)
    return np.where(keep[:, :, np.newaxis], frame, grey)


def adjust_brightness_contrast(
    frame: np.ndarray, brightness: float = 1.0, contrast: float = 1.0
) -> np.ndarray:
    """
    Линейная коррекция яркости и контраста.

    out = frame * brightness * contrast + 127.5 * (1 - contrast),
    округление и ограничение [0, 255]. При (1.0, 1.0) кадр не меняется.
    """
    ensure_frame(frame)
    alpha = brightness * contrast
    beta = 127.5 * (1.0 - contrast)
    adjusted = frame.astype(np.float32) * alpha + beta
    return clamp_u8(np.rint(adjusted))


def to_display(buffer: np.ndarray) -> np.ndarray:
    """Привести int16/float32 результат к uint8 для показа (|x|, насыщение)."""
    if buffer.dtype == np.uint8:
        return buffer
    return cv2.convertScaleAbs(buffer)


def green_screen(
    frame: np.ndarray,
    lower: tuple[int, int, int] = (40, 40, 40),
    upper: tuple[int, int, int] = (80, 255, 255),
) -> np.ndarray:
    """
    Хромакей: пиксели, попавшие в диапазон HSV, заменяются чёрными.

    Args:
        frame: Кадр BGR (H, W, 3), uint8
        lower: Нижняя граница (H, S, V), H в шкале OpenCV 0..179
        upper: Верхняя граница (H, S, V)

    Returns:
        Кадр BGR (H, W, 3), uint8
    """
    ensure_frame(frame, color=True)
    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    keyed = cv2.inRange(hsv, np.array(lower, dtype=np.uint8), np.array(upper, dtype=np.uint8))
    return cv2.bitwise_and(frame, frame, mask=cv2.bitwise_not(keyed))
