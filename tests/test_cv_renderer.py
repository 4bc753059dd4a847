"""Тесты для OpenCV рендерера."""

from collections.abc import Sequence

import numpy as np

from vidfx.messages import Region
from vidfx.overlay import CvOverlayRenderer
from vidfx.overlay.layers import BoxesLayer, HeartsLayer

REGIONS = [Region(200, 200, 120, 120)]


def test_renderer_calls_all_enabled_layers() -> None:
    """Рендерер вызывает все включенные слои."""
    frame = np.zeros((480, 640, 3), dtype=np.uint8)

    layers = [
        BoxesLayer(enabled=True),
        HeartsLayer(enabled=True, rng=np.random.default_rng(0)),
    ]

    renderer = CvOverlayRenderer(layers)
    renderer.draw(frame, REGIONS)

    assert frame.sum() > 0, "Рендерер должен вызвать слои"


def test_renderer_skips_disabled_layers() -> None:
    """Рендерер пропускает отключенные слои."""
    frame = np.zeros((480, 640, 3), dtype=np.uint8)

    layers = [
        BoxesLayer(enabled=False),
        HeartsLayer(enabled=False),
    ]

    renderer = CvOverlayRenderer(layers)
    renderer.draw(frame, REGIONS)

    assert frame.sum() == 0, "Отключенные слои не должны менять кадр"


def test_renderer_with_no_regions() -> None:
    """Без областей кадр не меняется."""
    frame = np.zeros((480, 640, 3), dtype=np.uint8)

    renderer = CvOverlayRenderer([BoxesLayer(), HeartsLayer()])
    renderer.draw(frame, [])

    assert frame.sum() == 0, "Без областей нечего рисовать"


def test_renderer_with_empty_layers() -> None:
    """Рендерер работает с пустым списком слоёв."""
    frame = np.zeros((480, 640, 3), dtype=np.uint8)

    renderer = CvOverlayRenderer([])
    renderer.draw(frame, REGIONS)

    assert frame.sum() == 0, "Пустой рендерер не должен менять кадр"


def test_renderer_passes_regions_to_layers() -> None:
    """Каждый слой получает список областей."""
    received: list[Sequence[Region]] = []

    class RecordingLayer(BoxesLayer):
        def render(self, frame: np.ndarray, regions: Sequence[Region]) -> None:
            received.append(regions)

    renderer = CvOverlayRenderer([RecordingLayer(), RecordingLayer()])
    renderer.draw(np.zeros((10, 10, 3), dtype=np.uint8), REGIONS)

    assert received == [REGIONS, REGIONS]


def test_renderer_sorts_layers_by_priority() -> None:
    """Рендерер сортирует слои по приоритету."""
    frame = np.zeros((480, 640, 3), dtype=np.uint8)

    call_order: list[int] = []

    class PriorityTrackedLayer(BoxesLayer):
        """Слой, который отслеживает порядок вызовов по приоритету."""

        def __init__(self, priority: int) -> None:
            super().__init__(enabled=True)
            self.priority = priority

        def render(self, frame: np.ndarray, regions: Sequence[Region]) -> None:
            call_order.append(self.priority)

    # Создаём слои в случайном порядке приоритетов
    layers = [
        PriorityTrackedLayer(100),  # Должен быть вторым
        PriorityTrackedLayer(0),    # Должен быть первым
        PriorityTrackedLayer(200),  # Должен быть третьим
    ]

    renderer = CvOverlayRenderer(layers)
    renderer.draw(frame, REGIONS)

    assert call_order == [0, 100, 200], "Слои должны вызываться в порядке приоритета"


def test_hearts_drawn_over_boxes() -> None:
    """Сердечки имеют более высокий приоритет, чем рамки."""
    renderer = CvOverlayRenderer([HeartsLayer(), BoxesLayer()])

    assert [type(layer) for layer in renderer.layers] == [BoxesLayer, HeartsLayer]
