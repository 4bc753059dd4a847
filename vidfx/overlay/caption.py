"""Подпись к кадру: текст на закрашенной плашке."""

import cv2
import numpy as np

CAPTION_FONT = cv2.FONT_HERSHEY_SIMPLEX
CAPTION_SCALE = 1.5
CAPTION_THICKNESS = 3


def draw_caption(
    img: np.ndarray,
    text: str,
    position: tuple[int, int],
    text_color: tuple[int, int, int] = (255, 255, 255),
    bg_color: tuple[int, int, int] = (0, 0, 0),
) -> None:
    """
    Нарисовать подпись поверх закрашенного прямоугольника.

    Плашка начинается в position по x, сверху ограничена высотой текста,
    снизу выступает на 5 пикселей ниже базовой линии.

    Args:
        img: Кадр BGR, модифицируется на месте
        text: Текст подписи
        position: Левый нижний угол текста (x, y) - базовая линия
        text_color: Цвет текста (BGR)
        bg_color: Цвет плашки (BGR)
    """
    if not text:
        return

    x, y = position
    (width, height), _ = cv2.getTextSize(text, CAPTION_FONT, CAPTION_SCALE, CAPTION_THICKNESS)
    cv2.rectangle(img, (x, y - height), (x + width - 1, y + 4), bg_color, cv2.FILLED)
    cv2.putText(
        img, text, (x, y), CAPTION_FONT, CAPTION_SCALE, text_color, CAPTION_THICKNESS
    )
