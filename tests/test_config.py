"""Тесты для конфигурации."""

import pytest
from pydantic import ValidationError

from vidfx.config import Config, FilterConfig, OutputConfig, OverlayConfig


def test_filter_config_defaults() -> None:
    """Проверка дефолтных значений FilterConfig."""
    config = FilterConfig()

    assert config.vignette_strength == 0.8
    assert config.vignette_radius == 0.7
    assert config.quantize_levels == 10
    assert config.strong_color_threshold == 128
    assert config.brightness == 1.0
    assert config.contrast == 1.0
    assert config.blur_variant == "separable"


def test_overlay_config_defaults() -> None:
    """Проверка дефолтных значений OverlayConfig."""
    config = OverlayConfig()

    assert config.enabled is True
    assert config.plugins["boxes"]["min_width"] == 50
    assert config.plugins["hearts"]["count"] == 5
    assert config.modes["region_detect"] == ["boxes"]
    assert config.modes["region_highlight"] == ["hearts"]


def test_overlay_config_defaults_are_not_shared() -> None:
    """Изменение одного экземпляра не влияет на другой."""
    first = OverlayConfig()
    first.plugins["boxes"]["min_width"] = 10

    assert OverlayConfig().plugins["boxes"]["min_width"] == 50


def test_root_config_sections() -> None:
    """Главная конфигурация содержит все секции."""
    config = Config()

    assert config.video.wait_key_ms == 10
    assert config.detector.downscale == 2
    assert config.detector.cascade_file.endswith("haarcascade_frontalface_alt2.xml")
    assert config.output.extension == ".jpg"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"quantize_levels": 0},
        {"vignette_radius": 0.0},
        {"strong_color_threshold": 256},
        {"blur_variant": "box"},
    ],
)
def test_filter_config_rejects_invalid_values(kwargs: dict) -> None:
    """Некорректные параметры фильтров отклоняются."""
    with pytest.raises(ValidationError):
        FilterConfig(**kwargs)


def test_output_config_rejects_bad_extension() -> None:
    """Расширение файла должно начинаться с точки."""
    with pytest.raises(ValidationError):
        OutputConfig(extension="jpg")
