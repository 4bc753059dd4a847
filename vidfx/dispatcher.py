"""Mode dispatcher: one active filter per frame."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import cv2
import numpy as np

from vidfx import filters
from vidfx.config import FilterConfig, OverlayConfig, config
from vidfx.detection import RegionLocator
from vidfx.filters import FilterError
from vidfx.messages import EMPTY_REGION, Action, Command, FilterMode, Region
from vidfx.overlay import CvOverlayRenderer, build_layers

logger = logging.getLogger(__name__)

REGION_MODES = (FilterMode.REGION_DETECT, FilterMode.REGION_HIGHLIGHT)


class TransformError(RuntimeError):
    """OpenCV failed inside a filter pipeline."""


@dataclass
class FilterParams:
    vignette_strength: float = 0.8
    vignette_radius: float = 0.7
    quantize_levels: int = 10
    strong_color_threshold: int = 128
    brightness: float = 1.0
    contrast: float = 1.0

    @classmethod
    def from_config(cls, settings: FilterConfig) -> "FilterParams":
        return cls(
            vignette_strength=settings.vignette_strength,
            vignette_radius=settings.vignette_radius,
            quantize_levels=settings.quantize_levels,
            strong_color_threshold=settings.strong_color_threshold,
            brightness=settings.brightness,
            contrast=settings.contrast,
        )


@dataclass
class ModeState:
    mode: FilterMode = FilterMode.OFF
    params: FilterParams = field(default_factory=FilterParams)


class ModeDispatcher:
    """
    Holds the active filter mode and its parameters and renders frames.

    Commands are applied with handle() and frames are rendered with render();
    both are called from the same thread, one after the other, once per tick.
    """

    def __init__(
        self,
        locator: RegionLocator,
        filter_settings: FilterConfig | None = None,
        overlay_settings: OverlayConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.locator = locator
        self.filter_settings = filter_settings if filter_settings is not None else config.filters
        self.overlay_settings = (
            overlay_settings if overlay_settings is not None else config.overlay
        )
        self.state = ModeState(params=FilterParams.from_config(self.filter_settings))
        self.last_region: Region = EMPTY_REGION

        self._blur = (
            filters.blur5x5_direct
            if self.filter_settings.blur_variant == "direct"
            else filters.blur5x5_separable
        )
        self._pipelines: dict[FilterMode, Callable[[np.ndarray], np.ndarray]] = {
            FilterMode.OFF: self._pass_through,
            FilterMode.GRAYSCALE: filters.grayscale,
            FilterMode.ALT_GRAYSCALE: filters.alt_grayscale,
            FilterMode.TONE_MAP: filters.tone_map,
            FilterMode.VIGNETTE: self._vignette,
            FilterMode.BLUR: self._blur,
            FilterMode.GRADIENT_X: lambda frame: filters.to_display(filters.sobel_x(frame)),
            FilterMode.GRADIENT_Y: lambda frame: filters.to_display(filters.sobel_y(frame)),
            FilterMode.GRADIENT_MAGNITUDE: self._magnitude,
            FilterMode.POSTERIZE: self._posterize,
            FilterMode.REGION_DETECT: self._regions,
            FilterMode.REGION_HIGHLIGHT: self._regions,
            FilterMode.DOMINANT_COLOR: self._strong_color,
            FilterMode.EMBOSS: lambda frame: filters.to_display(filters.emboss(frame)),
            FilterMode.GREEN_SCREEN: self._green_screen,
        }

        self._renderers: dict[FilterMode, CvOverlayRenderer] = {}
        if self.overlay_settings.enabled:
            for mode in REGION_MODES:
                names = self.overlay_settings.modes.get(mode.value, [])
                layers = build_layers(self.overlay_settings.plugins, names, rng=rng)
                self._renderers[mode] = CvOverlayRenderer(layers)

    @property
    def mode(self) -> FilterMode:
        return self.state.mode

    @property
    def params(self) -> FilterParams:
        return self.state.params

    # -- commands ---------------------------------------------------------

    def set_mode(self, mode: FilterMode) -> None:
        if mode != self.state.mode:
            logger.info("Mode %s -> %s", self.state.mode.value, mode.value)
        self.state.mode = mode

    def toggle(self, mode: FilterMode) -> FilterMode:
        """Switch to mode, or back to OFF if it is already active."""
        self.set_mode(FilterMode.OFF if self.state.mode == mode else mode)
        return self.state.mode

    def _clamp_gain(self, value: float) -> float:
        low, high = self.filter_settings.min_gain, self.filter_settings.max_gain
        return round(min(max(value, low), high), 6)

    def adjust_brightness(self, delta: float) -> float:
        params = self.state.params
        params.brightness = self._clamp_gain(params.brightness + delta)
        logger.info("Brightness: %.2f", params.brightness)
        return params.brightness

    def adjust_contrast(self, delta: float) -> float:
        params = self.state.params
        params.contrast = self._clamp_gain(params.contrast + delta)
        logger.info("Contrast: %.2f", params.contrast)
        return params.contrast

    def handle(self, command: Command) -> None:
        """Apply a mode or parameter command. SAVE and QUIT belong to the session."""
        brightness_step = self.filter_settings.brightness_step
        contrast_step = self.filter_settings.contrast_step

        if command.action == Action.TOGGLE and command.mode is not None:
            self.toggle(command.mode)
        elif command.action == Action.SELECT and command.mode is not None:
            self.set_mode(command.mode)
        elif command.action == Action.BRIGHTNESS_UP:
            self.adjust_brightness(brightness_step)
        elif command.action == Action.BRIGHTNESS_DOWN:
            self.adjust_brightness(-brightness_step)
        elif command.action == Action.CONTRAST_UP:
            self.adjust_contrast(contrast_step)
        elif command.action == Action.CONTRAST_DOWN:
            self.adjust_contrast(-contrast_step)

    # -- rendering --------------------------------------------------------

    def render(self, frame: np.ndarray) -> np.ndarray:
        """
        Run the active mode's pipeline on a frame.

        Returns the displayable uint8 result. An empty or malformed frame
        falls back to the untransformed input; an OpenCV failure raises
        TransformError.
        """
        mode = self.state.mode
        try:
            return self._pipelines[mode](frame)
        except FilterError as exc:
            logger.warning("Filter %s skipped: %s", mode.value, exc)
            return frame
        except cv2.error as exc:
            logger.error("OpenCV exception in %s: %s", mode.value, exc)
            raise TransformError(str(exc)) from exc

    def smooth(self, regions: Sequence[Region]) -> Region:
        """Average the first detected region into last_region."""
        if regions:
            self.last_region = self.last_region.averaged(regions[0])
        return self.last_region

    def _pass_through(self, frame: np.ndarray) -> np.ndarray:
        params = self.state.params
        return filters.adjust_brightness_contrast(frame, params.brightness, params.contrast)

    def _vignette(self, frame: np.ndarray) -> np.ndarray:
        params = self.state.params
        return filters.vignette(frame, params.vignette_strength, params.vignette_radius)

    def _magnitude(self, frame: np.ndarray) -> np.ndarray:
        gx = filters.sobel_x(frame)
        gy = filters.sobel_y(frame)
        return filters.to_display(filters.gradient_magnitude(gx, gy))

    def _posterize(self, frame: np.ndarray) -> np.ndarray:
        return filters.blur_quantize(frame, self.state.params.quantize_levels)

    def _strong_color(self, frame: np.ndarray) -> np.ndarray:
        return filters.strong_color(frame, self.state.params.strong_color_threshold)

    def _green_screen(self, frame: np.ndarray) -> np.ndarray:
        settings = self.filter_settings
        return filters.green_screen(frame, settings.green_lower, settings.green_upper)

    def _regions(self, frame: np.ndarray) -> np.ndarray:
        regions = self.locator.locate(filters.grayscale(frame))
        output = frame.copy()
        if regions:
            regions = [self.smooth(regions), *regions[1:]]
            renderer = self._renderers.get(self.state.mode)
            if renderer is not None:
                renderer.draw(output, regions)
        return output
