"""Реестр слоёв-оверлеев, доступных режимам областей."""

from typing import Type

from vidfx.overlay.base import Layer

_PLUGINS: dict[str, Type[Layer]] = {}


def _qualified(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def register_layer(name: str):
    """
    Декоратор: зарегистрировать класс слоя под именем из конфигурации.

    Имя совпадает с ключом в config.overlay.plugins. Повторная регистрация
    того же класса (например, при перезагрузке модуля) разрешена, другого
    класса под занятым именем - нет.

    Raises:
        TypeError: Класс не наследует Layer
        ValueError: Имя уже занято другим классом

    Example:
        @register_layer("boxes")
        class BoxesLayer(Layer):
            def render(self, frame, regions):
                ...
    """

    def decorator(cls: Type[Layer]) -> Type[Layer]:
        if not (isinstance(cls, type) and issubclass(cls, Layer)):
            raise TypeError(f"Overlay plugin '{name}' must subclass Layer")

        existing = _PLUGINS.get(name)
        if existing is not None and _qualified(existing) != _qualified(cls):
            raise ValueError(
                f"Overlay plugin '{name}' already registered by {_qualified(existing)}"
            )

        cls.plugin_name = name
        _PLUGINS[name] = cls
        return cls

    return decorator


def get_plugin(name: str) -> Type[Layer] | None:
    """Класс слоя по имени или None."""
    return _PLUGINS.get(name)


def list_plugins() -> dict[str, Type[Layer]]:
    """Копия реестра {имя: класс}; изменения копии на реестр не влияют."""
    return _PLUGINS.copy()
