"""Тесты для веб-интерфейса."""

import threading

import numpy as np
import pytest
from fastapi.testclient import TestClient

from vidfx.messages import Action, Command, FilterMode
from vidfx.web.server import app, parse_control_message
from vidfx.web.stream import BOUNDARY, MjpegSink, QueueCommandSource

# Без контекстного менеджера startup не вызывается и камера не открывается
client = TestClient(app)


def test_health() -> None:
    """Проверка эндпоинта здоровья."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_index_page() -> None:
    """Главная страница ссылается на видеопоток."""
    response = client.get("/")

    assert response.status_code == 200
    assert 'src="/video"' in response.text


def test_modes_lists_key_bindings() -> None:
    """Список режимов совпадает с раскладкой клавиш."""
    body = client.get("/api/modes").json()

    assert body["modes"]["g"] == "grayscale"
    assert body["modes"]["p"] == "emboss"
    assert body["actions"]["q"] == "quit"
    assert len(body["modes"]) == 14


def test_state_without_session() -> None:
    """Без запущенной сессии состояние недоступно."""
    response = client.get("/api/state")

    assert response.status_code == 503


@pytest.mark.parametrize(
    ("msg", "expected"),
    [
        ({"type": "key", "key": "b"}, Command(Action.TOGGLE, FilterMode.BLUR)),
        ({"type": "key", "key": "s"}, Command(Action.SAVE)),
        ({"type": "key", "key": "z"}, None),
        ({"type": "key", "key": "bb"}, None),
        ({"type": "mode", "mode": "vignette"}, Command(Action.SELECT, FilterMode.VIGNETTE)),
        ({"type": "mode", "mode": "unknown"}, None),
        ({"type": "save"}, Command(Action.SAVE)),
        ({"type": "save", "caption": "hello"}, Command(Action.SAVE, caption="hello")),
        ({"type": "key", "key": "k"}, Command(Action.TOGGLE, FilterMode.GREEN_SCREEN)),
        ({"type": "ping"}, None),
        ({}, None),
    ],
)
def test_parse_control_message(msg: dict, expected: Command | None) -> None:
    """Сообщения управления преобразуются в команды."""
    assert parse_control_message(msg) == expected


def test_mjpeg_sink_yields_latest_frame() -> None:
    """Поток MJPEG отдаёт кадр в формате multipart."""
    sink = MjpegSink()
    sink.show(np.zeros((16, 16, 3), dtype=np.uint8))

    chunk = next(sink.frames(timeout=0.1))

    assert chunk.startswith(f"--{BOUNDARY}\r\nContent-Type: image/jpeg\r\n\r\n".encode())
    assert chunk.endswith(b"\r\n")
    assert sink.latest() is not None
    assert sink.latest()[:2] == b"\xff\xd8"


def test_mjpeg_sink_close_ends_stream() -> None:
    """Закрытие приёмника завершает генератор кадров."""
    sink = MjpegSink()
    frames = sink.frames(timeout=0.05)
    timer = threading.Timer(0.1, sink.close)
    timer.start()

    assert list(frames) == []
    timer.join()


def test_queue_command_source_fifo() -> None:
    """Команды выдаются по одной в порядке поступления."""
    source = QueueCommandSource()
    assert source.poll() is None

    source.put(Command(Action.BRIGHTNESS_UP))
    source.put(Command(Action.QUIT))

    assert source.poll() == Command(Action.BRIGHTNESS_UP)
    assert source.poll() == Command(Action.QUIT)
    assert source.poll() is None
