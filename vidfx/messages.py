from dataclasses import dataclass
from enum import Enum


class FilterMode(str, Enum):
    OFF = "off"
    GRAYSCALE = "grayscale"
    ALT_GRAYSCALE = "alt_grayscale"
    TONE_MAP = "tone_map"
    VIGNETTE = "vignette"
    BLUR = "blur"
    GRADIENT_X = "gradient_x"
    GRADIENT_Y = "gradient_y"
    GRADIENT_MAGNITUDE = "gradient_magnitude"
    POSTERIZE = "posterize"
    REGION_DETECT = "region_detect"
    REGION_HIGHLIGHT = "region_highlight"
    DOMINANT_COLOR = "dominant_color"
    EMBOSS = "emboss"
    GREEN_SCREEN = "green_screen"


class Action(str, Enum):
    TOGGLE = "toggle"
    SELECT = "select"
    BRIGHTNESS_UP = "brightness_up"
    BRIGHTNESS_DOWN = "brightness_down"
    CONTRAST_UP = "contrast_up"
    CONTRAST_DOWN = "contrast_down"
    SAVE = "save"
    QUIT = "quit"


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int

    def scaled(self, factor: float) -> "Region":
        """Coordinates multiplied by factor, truncated to whole pixels."""
        return Region(
            int(self.x * factor),
            int(self.y * factor),
            int(self.width * factor),
            int(self.height * factor),
        )

    def averaged(self, other: "Region") -> "Region":
        """Integer-truncated midpoint of two regions."""
        return Region(
            (self.x + other.x) // 2,
            (self.y + other.y) // 2,
            (self.width + other.width) // 2,
            (self.height + other.height) // 2,
        )


EMPTY_REGION = Region(0, 0, 0, 0)


@dataclass(frozen=True)
class Command:
    action: Action
    mode: FilterMode | None = None  # TOGGLE and SELECT only
    caption: str | None = None  # SAVE only, overrides the configured caption


MODE_KEYS: dict[str, FilterMode] = {
    "g": FilterMode.GRAYSCALE,
    "h": FilterMode.ALT_GRAYSCALE,
    "t": FilterMode.TONE_MAP,
    "v": FilterMode.VIGNETTE,
    "b": FilterMode.BLUR,
    "x": FilterMode.GRADIENT_X,
    "y": FilterMode.GRADIENT_Y,
    "m": FilterMode.GRADIENT_MAGNITUDE,
    "l": FilterMode.POSTERIZE,
    "f": FilterMode.REGION_DETECT,
    "c": FilterMode.REGION_HIGHLIGHT,
    "n": FilterMode.DOMINANT_COLOR,
    "p": FilterMode.EMBOSS,
    "k": FilterMode.GREEN_SCREEN,
}

ACTION_KEYS: dict[str, Action] = {
    "w": Action.BRIGHTNESS_UP,
    "e": Action.BRIGHTNESS_DOWN,
    "a": Action.CONTRAST_UP,
    "d": Action.CONTRAST_DOWN,
    "s": Action.SAVE,
    "q": Action.QUIT,
}


def parse_key(key: str) -> Command | None:
    """Map a single typed character to a command, None if unbound."""
    if key in MODE_KEYS:
        return Command(Action.TOGGLE, MODE_KEYS[key])
    if key in ACTION_KEYS:
        return Command(ACTION_KEYS[key])
    return None
