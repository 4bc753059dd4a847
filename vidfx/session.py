"""Session loop: capture -> dispatcher -> display, one frame per tick."""

import logging
from pathlib import Path
from typing import Protocol

import cv2
import numpy as np

from vidfx.config import OutputConfig, VideoConfig, config
from vidfx.dispatcher import ModeDispatcher, TransformError
from vidfx.messages import Action, Command, parse_key
from vidfx.overlay.caption import draw_caption

logger = logging.getLogger(__name__)


class CaptureSource(Protocol):
    def next_frame(self) -> tuple[np.ndarray | None, bool]: ...

    def release(self) -> None: ...


class DisplaySink(Protocol):
    def show(self, frame: np.ndarray) -> None: ...


class CommandSource(Protocol):
    def poll(self) -> Command | None: ...


class CvCapture:
    """cv2.VideoCapture wrapper producing BGR frames."""

    def __init__(self, settings: VideoConfig | None = None) -> None:
        self.settings = settings if settings is not None else config.video
        self._cap = cv2.VideoCapture(self.settings.camera_index)
        if not self._cap.isOpened():
            raise RuntimeError(f"Unable to open video device {self.settings.camera_index}")

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.settings.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.settings.height)
        logger.info(
            "Stream started: %dx%d",
            int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )

    def next_frame(self) -> tuple[np.ndarray | None, bool]:
        ret, frame = self._cap.read()
        if not ret or frame is None or frame.size == 0:
            return None, False
        if self.settings.flip_horizontal:
            frame = cv2.flip(frame, 1)
        return frame, True

    def release(self) -> None:
        self._cap.release()


class ImageFileCapture:
    """
    Still image as a capture source.

    The file is read once; every tick gets a fresh copy, so the session
    keeps showing it until quit.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._image = cv2.imread(str(self.path))
        if self._image is None or self._image.size == 0:
            raise RuntimeError(f"Image {self.path} not found or cannot be read")
        logger.info(
            "Displaying image %s (%dx%d)", self.path, self._image.shape[1], self._image.shape[0]
        )

    def next_frame(self) -> tuple[np.ndarray | None, bool]:
        if self._image is None:
            return None, False
        return self._image.copy(), True

    def release(self) -> None:
        self._image = None


class CvWindow:
    """
    OpenCV HighGUI window.

    Acts as both display sink and command source: waitKey() pumps the window
    event loop and returns the key typed during the wait.
    """

    def __init__(self, settings: VideoConfig | None = None) -> None:
        self.settings = settings if settings is not None else config.video
        cv2.namedWindow(self.settings.window_name, cv2.WINDOW_AUTOSIZE)

    def show(self, frame: np.ndarray) -> None:
        cv2.imshow(self.settings.window_name, frame)

    def poll(self) -> Command | None:
        code = cv2.waitKey(self.settings.wait_key_ms)
        if code < 0:
            return None
        return parse_key(chr(code & 0xFF))

    def close(self) -> None:
        cv2.destroyWindow(self.settings.window_name)


class FrameSaver:
    """Writes frames as <prefix>_<n><ext>, n increasing, never overwriting."""

    def __init__(self, settings: OutputConfig | None = None) -> None:
        self.settings = settings if settings is not None else config.output
        self.directory = Path(self.settings.directory)
        self.counter = 0

    def _next_path(self) -> Path:
        while True:
            path = self.directory / f"{self.settings.prefix}_{self.counter}{self.settings.extension}"
            self.counter += 1
            if not path.exists():
                return path

    def save(self, frame: np.ndarray, caption: str | None = None) -> Path | None:
        """
        Write a frame, captioned with caption or the configured caption.

        The caption is drawn on a copy; the displayed frame is untouched.
        """
        text = caption if caption is not None else self.settings.caption
        if text:
            frame = frame.copy()
            draw_caption(frame, text, self.settings.caption_position)

        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._next_path()
        if not cv2.imwrite(str(path), frame):
            logger.error("Failed to save frame to %s", path)
            return None
        logger.info("Image saved as %s", path)
        return path


class SessionLoop:
    """
    Single-threaded tick loop.

    Each tick: poll one command, read one frame, apply the command, render,
    show, then save if requested. Quit is checked once per tick.
    """

    def __init__(
        self,
        capture: CaptureSource,
        dispatcher: ModeDispatcher,
        sink: DisplaySink,
        commands: CommandSource,
        saver: FrameSaver | None = None,
    ) -> None:
        self.capture = capture
        self.dispatcher = dispatcher
        self.sink = sink
        self.commands = commands
        self.saver = saver if saver is not None else FrameSaver()
        self.frames = 0
        self._running = False

    def tick(self) -> bool:
        """Process one frame. Returns False when the session should end."""
        command = self.commands.poll()
        if command is not None and command.action == Action.QUIT:
            logger.info("Quitting")
            return False

        frame, present = self.capture.next_frame()
        if not present or frame is None:
            logger.info("Frame is empty, ending session")
            return False

        if command is not None:
            self.dispatcher.handle(command)

        try:
            output = self.dispatcher.render(frame)
        except TransformError:
            logger.error("Ending session after transform failure")
            return False

        self.sink.show(output)
        self.frames += 1

        if command is not None and command.action == Action.SAVE:
            self.saver.save(output, command.caption)
        return True

    def run(self) -> int:
        """Run until quit, end of stream, stop() or a transform failure."""
        self._running = True
        logger.info("Session started in mode %s", self.dispatcher.mode.value)
        try:
            while self._running and self.tick():
                pass
        finally:
            self._running = False
            self.capture.release()
            logger.info("Session ended after %d frames", self.frames)
        return self.frames

    def stop(self) -> None:
        self._running = False
