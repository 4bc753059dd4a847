"""Автоматическая загрузка плагинов оверлеев."""

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Type

from vidfx.overlay.base import Layer
from vidfx.overlay.plugin_registry import list_plugins

logger = logging.getLogger(__name__)


def discover_plugins(package_name: str = "vidfx.overlay.layers") -> dict[str, Type[Layer]]:
    """
    Автоматическое обнаружение и загрузка плагинов из пакета.

    Функция импортирует все модули в указанном пакете, что приводит
    к регистрации плагинов через декоратор @register_layer.

    Args:
        package_name: Имя пакета для сканирования (по умолчанию vidfx.overlay.layers)

    Returns:
        Словарь {имя: класс} всех зарегистрированных плагинов
    """
    try:
        package = importlib.import_module(package_name)
    except ImportError as e:
        logger.error("Failed to import package %s: %s", package_name, e)
        return {}

    if not hasattr(package, "__file__") or package.__file__ is None:
        logger.warning("Package %s has no __file__ attribute", package_name)
        return {}

    package_path = Path(package.__file__).parent

    loaded_count = 0
    for _, module_name, _ in pkgutil.iter_modules([str(package_path)]):
        try:
            importlib.import_module(f"{package_name}.{module_name}")
            loaded_count += 1
            logger.debug("Loaded plugin module: %s.%s", package_name, module_name)
        except Exception as e:
            logger.error(
                "Failed to load plugin module %s.%s: %s", package_name, module_name, e
            )

    plugins = list_plugins()
    logger.info("Discovered %d plugins from %d modules", len(plugins), loaded_count)

    return plugins


def build_layers(
    plugin_configs: dict[str, dict[str, Any]],
    names: Iterable[str] | None = None,
    **shared: Any,
) -> list[Layer]:
    """
    Создать слои по конфигурации плагинов.

    Args:
        plugin_configs: Словарь {имя плагина: параметры}, ключи "enabled"
            и "priority" обрабатываются отдельно
        names: Какие плагины создавать (по умолчанию все из plugin_configs)
        **shared: Общие параметры (например, rng), передаются только тем
            плагинам, конструктор которых их принимает

    Returns:
        Список созданных слоёв
    """
    available_plugins = discover_plugins()
    layers: list[Layer] = []

    for plugin_name in names if names is not None else plugin_configs:
        plugin_config = plugin_configs.get(plugin_name, {})
        if not plugin_config.get("enabled", True):
            continue

        plugin_cls = available_plugins.get(plugin_name)
        if plugin_cls is None:
            logger.warning("Plugin '%s' not found, skipping", plugin_name)
            continue

        params = {
            k: v for k, v in plugin_config.items() if k not in ("enabled", "priority")
        }
        accepted = inspect.signature(plugin_cls).parameters
        params.update({k: v for k, v in shared.items() if k in accepted})

        layer = plugin_cls(**params)
        if "priority" in plugin_config:
            layer.priority = plugin_config["priority"]

        layers.append(layer)
        logger.info("Loaded plugin '%s' with priority %d", plugin_name, layer.priority)

    return layers
