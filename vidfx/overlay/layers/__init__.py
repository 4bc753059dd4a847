"""Слои оверлеев для аннотации найденных областей."""

from vidfx.overlay.layers.boxes import BoxesLayer
from vidfx.overlay.layers.hearts import HeartsLayer, draw_heart

__all__ = ["BoxesLayer", "HeartsLayer", "draw_heart"]
