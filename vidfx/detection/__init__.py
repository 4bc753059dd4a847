"""Поиск областей интереса (лиц) на кадре."""

from vidfx.detection.face import DetectorLoadError, HaarRegionLocator, RegionLocator

__all__ = ["DetectorLoadError", "HaarRegionLocator", "RegionLocator"]
