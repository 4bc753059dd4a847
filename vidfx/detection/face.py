"""Face detection via OpenCV Haar cascades."""

import logging
from typing import Protocol

import cv2
import numpy as np

from vidfx.config import DetectorConfig, config
from vidfx.filters import FilterError
from vidfx.messages import Region

logger = logging.getLogger(__name__)


class DetectorLoadError(RuntimeError):
    """The detection model could not be loaded."""


class RegionLocator(Protocol):
    def locate(self, gray: np.ndarray) -> list[Region]:
        """Return zero or more regions found in a single-channel image."""
        ...


class HaarRegionLocator:
    """
    Haar cascade face locator.

    The cascade is loaded once in the constructor and reused for every frame.
    Detection runs on a downscaled, histogram-equalised copy and the regions
    are scaled back to full-frame coordinates.
    """

    def __init__(self, settings: DetectorConfig | None = None) -> None:
        self.settings = settings if settings is not None else config.detector
        self._cascade = cv2.CascadeClassifier()
        if not self._cascade.load(self.settings.cascade_file):
            raise DetectorLoadError(
                f"Unable to load face cascade file {self.settings.cascade_file}"
            )
        logger.info("Loaded face cascade from %s", self.settings.cascade_file)

    def locate(self, gray: np.ndarray) -> list[Region]:
        if gray is None or gray.size == 0 or gray.ndim != 2:
            raise FilterError("Region locator expects a non-empty single-channel image")

        factor = self.settings.downscale
        height, width = gray.shape
        small = gray
        if factor > 1 and width >= factor and height >= factor:
            small = cv2.resize(gray, (width // factor, height // factor))
        else:
            factor = 1

        if self.settings.equalize:
            small = cv2.equalizeHist(small)

        found = self._cascade.detectMultiScale(small)
        return [
            Region(int(x) * factor, int(y) * factor, int(w) * factor, int(h) * factor)
            for (x, y, w, h) in found
        ]
