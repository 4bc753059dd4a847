import argparse
import logging
import signal
import sys

import uvicorn

from vidfx.config import config
from vidfx.detection import DetectorLoadError, HaarRegionLocator
from vidfx.dispatcher import ModeDispatcher
from vidfx.session import CvCapture, CvWindow, FrameSaver, ImageFileCapture, SessionLoop

logger = logging.getLogger("vidfx.main")


def run_local(image: str | None = None) -> int:
    try:
        locator = HaarRegionLocator(config.detector)
    except DetectorLoadError as exc:
        logger.error("%s. Terminating", exc)
        return 1

    try:
        capture = ImageFileCapture(image) if image is not None else CvCapture(config.video)
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1

    window = CvWindow(config.video)
    session = SessionLoop(
        capture,
        ModeDispatcher(locator, config.filters, config.overlay),
        window,
        window,
        FrameSaver(config.output),
    )

    def signal_handler(sig, frame):
        logger.info("Interrupted, stopping session")
        session.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        session.run()
    finally:
        window.close()
    return 0


def run_web() -> int:
    uvicorn.run(
        "vidfx.web.server:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
        log_level="info",
    )
    return 0


def main() -> None:
    # Configure logging for the entire application
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s:     %(name)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Live video filters")
    parser.add_argument("--web", action="store_true", help="serve MJPEG + control websocket")
    parser.add_argument("--image", metavar="PATH", help="filter a still image instead of the camera")
    parser.add_argument("--caption", help="caption drawn on saved frames")
    args = parser.parse_args()

    if args.caption is not None:
        config.output.caption = args.caption

    sys.exit(run_web() if args.web else run_local(args.image))


if __name__ == "__main__":
    main()
