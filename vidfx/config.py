from typing import Any, Literal

import cv2
from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """Настройки веб-сервера"""
    host: str = Field("0.0.0.0", description="Адрес для привязки сервера")
    port: int = Field(8000, ge=1, le=65535, description="Порт сервера")
    reload: bool = Field(False, description="Auto-reload при изменении кода (для разработки)")


class VideoConfig(BaseModel):
    """Настройки видеопотока"""
    # Источник видео
    camera_index: int = Field(0, ge=0, description="Индекс камеры для OpenCV")

    # Разрешение (запрашивается у камеры, кадры не масштабируются)
    width: int = Field(640, ge=160, le=1920, description="Ширина видео")
    height: int = Field(480, ge=120, le=1080, description="Высота видео")

    # Опрос клавиатуры
    wait_key_ms: int = Field(10, ge=1, le=100, description="Таймаут ожидания клавиши (мс)")
    window_name: str = Field("Video", description="Заголовок окна")

    flip_horizontal: bool = Field(False, description="Горизонтальное отражение (зеркало)")


class FilterConfig(BaseModel):
    """Параметры фильтров (начальные значения)"""
    vignette_strength: float = Field(0.8, ge=0.0, le=1.0, description="Сила виньетки")
    vignette_radius: float = Field(0.7, gt=0.0, le=5.0, description="Радиус виньетки (доля полудиагонали)")
    quantize_levels: int = Field(10, ge=1, le=255, description="Число уровней постеризации")
    strong_color_threshold: int = Field(128, ge=0, le=255, description="Порог яркости для сохранения цвета")

    # Яркость/контраст в режиме без фильтра
    brightness: float = Field(1.0, ge=0.0, le=3.0, description="Начальная яркость")
    contrast: float = Field(1.0, ge=0.0, le=3.0, description="Начальный контраст")
    brightness_step: float = Field(0.1, gt=0.0, le=1.0, description="Шаг изменения яркости")
    contrast_step: float = Field(0.1, gt=0.0, le=1.0, description="Шаг изменения контраста")
    min_gain: float = Field(0.0, ge=0.0, le=1.0, description="Нижняя граница яркости/контраста")
    max_gain: float = Field(3.0, ge=1.0, le=10.0, description="Верхняя граница яркости/контраста")

    blur_variant: Literal["direct", "separable"] = Field(
        "separable", description="Реализация размытия 5x5"
    )

    # Хромакей (HSV, H в шкале OpenCV 0..179)
    green_lower: tuple[int, int, int] = Field((40, 40, 40), description="Нижняя граница зелёного в HSV")
    green_upper: tuple[int, int, int] = Field((80, 255, 255), description="Верхняя граница зелёного в HSV")


class DetectorConfig(BaseModel):
    """Настройки детектора лиц (Haar cascade)"""
    cascade_file: str = Field(
        cv2.data.haarcascades + "haarcascade_frontalface_alt2.xml",
        description="Путь к XML-файлу каскада",
    )
    downscale: int = Field(2, ge=1, le=8, description="Во сколько раз уменьшать кадр перед детекцией")
    equalize: bool = Field(True, description="Выравнивать гистограмму перед детекцией")


def _default_overlay_plugins() -> dict[str, dict[str, Any]]:
    return {
        "boxes": {
            "enabled": True,
            "min_width": 50,
            "color": (170, 120, 110),
            "thickness": 3,
        },
        "hearts": {
            "enabled": True,
            "min_width": 0,
            "count": 5,
            "min_size": 20,
            "max_size": 50,
        },
    }


def _default_overlay_modes() -> dict[str, list[str]]:
    return {
        "region_detect": ["boxes"],
        "region_highlight": ["hearts"],
    }


class OverlayConfig(BaseModel):
    """Настройки оверлеев над найденными областями"""
    enabled: bool = Field(True, description="Рисовать оверлеи")
    plugins: dict[str, dict[str, Any]] = Field(
        default_factory=_default_overlay_plugins,
        description="Параметры плагинов-слоёв",
    )
    modes: dict[str, list[str]] = Field(
        default_factory=_default_overlay_modes,
        description="Какие слои рисуются в каком режиме",
    )


class OutputConfig(BaseModel):
    """Сохранение кадров"""
    directory: str = Field("captures", description="Каталог для сохранённых кадров")
    prefix: str = Field("Image", description="Префикс имени файла")
    extension: str = Field(".jpg", pattern=r"^\.[A-Za-z0-9]+$", description="Расширение файла")

    # Подпись на сохраняемых кадрах (мем)
    caption: str | None = Field(None, description="Текст подписи; None - без подписи")
    caption_position: tuple[int, int] = Field((10, 40), description="Левый нижний угол текста (x, y)")


class Config(BaseModel):
    """Главная конфигурация приложения"""
    server: ServerConfig = ServerConfig()
    video: VideoConfig = VideoConfig()
    filters: FilterConfig = FilterConfig()
    detector: DetectorConfig = DetectorConfig()
    overlay: OverlayConfig = OverlayConfig()
    output: OutputConfig = OutputConfig()


# Глобальный экземпляр конфигурации
config = Config()
