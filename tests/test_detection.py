"""Тесты для детектора областей."""

import cv2
import numpy as np
import pytest

from vidfx.config import DetectorConfig
from vidfx.detection import DetectorLoadError, HaarRegionLocator
from vidfx.filters import FilterError
from vidfx.messages import Region


class _FakeCascade:
    """Каскад, возвращающий заранее заданные прямоугольники."""

    def __init__(self, found: list[tuple[int, int, int, int]]) -> None:
        self.found = found
        self.shapes: list[tuple[int, ...]] = []

    def detectMultiScale(self, image: np.ndarray) -> list[tuple[int, int, int, int]]:  # noqa: N802 - OpenCV API
        self.shapes.append(image.shape)
        return self.found


def test_missing_cascade_is_fatal(tmp_path) -> None:
    """Отсутствующий файл каскада - ошибка загрузки."""
    settings = DetectorConfig(cascade_file=str(tmp_path / "missing.xml"))

    with pytest.raises(DetectorLoadError):
        HaarRegionLocator(settings)


def test_bundled_cascade_finds_nothing_on_blank_image() -> None:
    """Встроенный каскад загружается; на пустом кадре лиц нет."""
    locator = HaarRegionLocator(DetectorConfig())

    assert locator.locate(np.zeros((240, 320), dtype=np.uint8)) == []


def test_regions_scaled_back_to_full_frame() -> None:
    """Детекция на уменьшенном кадре, координаты - в исходном масштабе."""
    locator = HaarRegionLocator(DetectorConfig(downscale=2))
    fake = _FakeCascade([(10, 20, 30, 40)])
    locator._cascade = fake  # noqa: SLF001 - подмена только в тесте

    regions = locator.locate(np.zeros((240, 320), dtype=np.uint8))

    assert regions == [Region(20, 40, 60, 80)]
    assert fake.shapes == [(120, 160)]


def test_locator_rejects_color_input() -> None:
    """Детектор принимает только одноканальные кадры."""
    locator = HaarRegionLocator(DetectorConfig())

    with pytest.raises(FilterError):
        locator.locate(np.zeros((20, 20, 3), dtype=np.uint8))


def test_installed_opencv_provides_cascades() -> None:
    """Установленный OpenCV 4.x содержит каскады Хаара и их файлы."""
    major = int(cv2.__version__.split(".")[0])

    assert major == 4, f"Ожидался OpenCV 4.x, установлен {cv2.__version__}"
    assert hasattr(cv2, "CascadeClassifier")
    assert DetectorConfig().cascade_file.startswith(cv2.data.haarcascades)
