"""Библиотека фильтров кадра."""

from vidfx.filters.base import (
    BLUR_1X5,
    BLUR_5X5,
    SOBEL_DERIVATIVE,
    SOBEL_DERIVATIVE_Y,
    SOBEL_SMOOTHING,
    FilterError,
    Kernel,
    ensure_frame,
)
from vidfx.filters.color import (
    adjust_brightness_contrast,
    alt_grayscale,
    grayscale,
    green_screen,
    strong_color,
    to_display,
    tone_map,
    vignette,
)
from vidfx.filters.convolution import (
    blur5x5_direct,
    blur5x5_separable,
    blur_quantize,
    emboss,
    gradient_magnitude,
    sobel_x,
    sobel_y,
)

__all__ = [
    "BLUR_1X5",
    "BLUR_5X5",
    "SOBEL_DERIVATIVE",
    "SOBEL_DERIVATIVE_Y",
    "SOBEL_SMOOTHING",
    "FilterError",
    "Kernel",
    "ensure_frame",
    "adjust_brightness_contrast",
    "alt_grayscale",
    "grayscale",
    "green_screen",
    "strong_color",
    "to_display",
    "tone_map",
    "vignette",
    "blur5x5_direct",
    "blur5x5_separable",
    "blur_quantize",
    "emboss",
    "gradient_magnitude",
    "sobel_x",
    "sobel_y",
]
