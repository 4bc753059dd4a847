"""MJPEG display sink and queued command source for the web surface"""
import logging
import queue
import threading
from collections.abc import Iterator

import cv2
import numpy as np

from vidfx.messages import Command

logger = logging.getLogger(__name__)

BOUNDARY = "frame"


class MjpegSink:
    """Keeps the latest rendered frame as JPEG for any number of viewers"""

    def __init__(self, quality: int = 80) -> None:
        self.quality = quality
        self._jpeg: bytes | None = None
        self._sequence = 0
        self._closed = False
        self._cond = threading.Condition()

    def show(self, frame: np.ndarray) -> None:
        ret, buffer = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self.quality])
        if not ret:
            logger.error("Failed to encode frame as JPEG")
            return
        with self._cond:
            self._jpeg = buffer.tobytes()
            self._sequence += 1
            self._cond.notify_all()

    def latest(self) -> bytes | None:
        with self._cond:
            return self._jpeg

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def frames(self, timeout: float = 1.0) -> Iterator[bytes]:
        """Yield each new frame as a multipart/x-mixed-replace chunk"""
        seen = 0
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._closed or self._sequence != seen, timeout)
                if self._closed:
                    return
                if self._sequence == seen or self._jpeg is None:
                    continue
                seen = self._sequence
                jpeg = self._jpeg

            yield (
                f"--{BOUNDARY}\r\n".encode()
                + b"Content-Type: image/jpeg\r\n\r\n"
                + jpeg
                + b"\r\n"
            )


class QueueCommandSource:
    """Thread-safe command queue; the session takes at most one per tick"""

    def __init__(self) -> None:
        self._queue: queue.Queue[Command] = queue.Queue()

    def put(self, command: Command) -> None:
        self._queue.put(command)

    def poll(self) -> Command | None:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None
