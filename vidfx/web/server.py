import json
import logging
import threading
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse, StreamingResponse

from vidfx.config import config
from vidfx.detection import HaarRegionLocator
from vidfx.dispatcher import ModeDispatcher
from vidfx.messages import ACTION_KEYS, MODE_KEYS, Action, Command, FilterMode, parse_key
from vidfx.session import CvCapture, SessionLoop
from vidfx.web.stream import BOUNDARY, MjpegSink, QueueCommandSource

logger = logging.getLogger(__name__)

app = FastAPI()

sink = MjpegSink()
commands = QueueCommandSource()

_session: SessionLoop | None = None
_session_thread: threading.Thread | None = None

INDEX_HTML = """<!doctype html>
<html>
<head><title>vidfx</title></head>
<body style="margin:0;background:#111">
<img src="/video" style="display:block;margin:auto;max-width:100%">
<script>
const ws = new WebSocket(`ws://${location.host}/ws/control`);
document.addEventListener("keydown", (e) => {
  if (e.key.length === 1) ws.send(JSON.stringify({type: "key", key: e.key}));
});
</script>
</body>
</html>
"""


def parse_control_message(msg: dict[str, Any]) -> Command | None:
    """Translate a websocket control message into a command"""
    msg_type = msg.get("type")
    if msg_type == "key":
        key = str(msg.get("key", ""))
        return parse_key(key) if len(key) == 1 else None
    if msg_type == "mode":
        try:
            return Command(Action.SELECT, FilterMode(msg.get("mode")))
        except ValueError:
            return None
    if msg_type == "save":
        caption = msg.get("caption")
        return Command(Action.SAVE, caption=str(caption) if caption else None)
    return None


@app.on_event("startup")
def on_startup() -> None:
    global _session, _session_thread

    # Detector load failure is fatal: let it propagate and abort startup
    locator = HaarRegionLocator(config.detector)
    dispatcher = ModeDispatcher(locator, config.filters, config.overlay)
    capture = CvCapture(config.video)

    _session = SessionLoop(capture, dispatcher, sink, commands)
    _session_thread = threading.Thread(target=_run_session, name="vidfx-session", daemon=True)
    _session_thread.start()


def _run_session() -> None:
    if _session is None:
        return
    try:
        _session.run()
    finally:
        sink.close()


@app.on_event("shutdown")
def on_shutdown() -> None:
    if _session is not None:
        _session.stop()
    if _session_thread is not None:
        _session_thread.join(timeout=2.0)
    sink.close()


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/")
async def index() -> HTMLResponse:
    return HTMLResponse(INDEX_HTML)


@app.get("/video")
def video() -> StreamingResponse:
    return StreamingResponse(
        sink.frames(),
        media_type=f"multipart/x-mixed-replace; boundary={BOUNDARY}",
    )


@app.get("/api/modes")
async def get_modes() -> dict[str, Any]:
    """Key bindings, for the frontend"""
    return {
        "modes": {key: mode.value for key, mode in MODE_KEYS.items()},
        "actions": {key: action.value for key, action in ACTION_KEYS.items()},
    }


@app.get("/api/state")
async def get_state() -> dict[str, Any]:
    if _session is None:
        raise HTTPException(status_code=503, detail="Session is not running")
    dispatcher = _session.dispatcher
    return {
        "mode": dispatcher.mode.value,
        "params": asdict(dispatcher.params),
        "frames": _session.frames,
    }


@app.websocket("/ws/control")
async def ws_control(ws: WebSocket) -> None:
    await ws.accept()
    try:
        while True:
            msg_text = await ws.receive_text()
            try:
                msg = json.loads(msg_text)
            except json.JSONDecodeError:
                logger.warning("Ignoring malformed control message")
                continue

            command = parse_control_message(msg) if isinstance(msg, dict) else None
            if command is not None:
                commands.put(command)

    except WebSocketDisconnect:
        logger.info("Control client disconnected")
