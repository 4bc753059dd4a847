"""Система оверлеев для аннотации найденных областей на кадре."""

from vidfx.overlay.base import Layer, OverlayRenderer
from vidfx.overlay.caption import draw_caption
from vidfx.overlay.cv_renderer import CvOverlayRenderer
from vidfx.overlay.plugin_loader import build_layers, discover_plugins
from vidfx.overlay.plugin_registry import get_plugin, list_plugins, register_layer

__all__ = [
    "Layer",
    "OverlayRenderer",
    "CvOverlayRenderer",
    "draw_caption",
    "build_layers",
    "discover_plugins",
    "get_plugin",
    "list_plugins",
    "register_layer",
]
