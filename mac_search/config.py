"""
Загрузчик конфигурации из config.yaml.

Предоставляет доступ к настройкам через точку:
    config.snmp.community
    config.cache.path
    config.output.mac_format

Порядок применения: значения по умолчанию → YAML → переменные окружения.
"""

import os
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .core.config_schema import AppConfig, validate_config
from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Где искать config.yaml если путь не указан явно
SEARCH_PATHS = (
    "config.yaml",
    "config.yml",
    str(Path.home() / ".mac_search.yaml"),
)

# Переменная окружения → (секция, ключ)
ENV_OVERRIDES = {
    "MAC_SEARCH_COMMUNITY": ("snmp", "community"),
    "MAC_SEARCH_CACHE": ("cache", "path"),
}


class ConfigSection:
    """Секция конфигурации с доступом через точку."""

    def __init__(self, data: dict = None):
        self._data = data or {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Получить значение с дефолтом."""
        return self._data.get(key, default)

    def to_dict(self) -> dict:
        return dict(self._data)

    def __repr__(self) -> str:
        return f"ConfigSection({self._data})"


class Config:
    """
    Главный класс конфигурации.

    Загружает настройки из config.yaml, валидирует через pydantic
    и предоставляет доступ через точку.

    Пример:
        config.snmp.community     # "public"
        config.snmp.max_workers   # 10
        config.output.mac_format  # "raw"
    """

    def __init__(self):
        self._data = AppConfig().model_dump()
        self.source: Optional[str] = None

    def _find_config_file(self) -> Optional[str]:
        for path in SEARCH_PATHS:
            if os.path.exists(path):
                return path
        return None

    def _load_yaml(self, config_file: Optional[str] = None) -> dict:
        """Читает YAML файл. Явно указанный файл обязан существовать."""
        if config_file and not os.path.exists(config_file):
            raise ConfigError("Файл конфигурации не найден", config_file=config_file)

        config_file = config_file or self._find_config_file()
        if not config_file:
            return {}

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Ошибка чтения YAML: {e}", config_file=config_file)

        if not isinstance(yaml_data, dict):
            raise ConfigError("Корень config.yaml должен быть словарём", config_file=config_file)

        self.source = config_file
        logger.debug(f"Конфигурация загружена из {config_file}")
        return yaml_data

    def _apply_env(self, data: dict) -> None:
        """Переопределяет значения из переменных окружения."""
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                # Пустая секция в YAML ("snmp:") загружается как None
                if data.get(section) is None:
                    data[section] = {}
                data[section][key] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def reload(self, config_file: Optional[str] = None) -> None:
        """
        Перезагружает конфигурацию.

        Raises:
            ConfigError: Файл не найден, не читается или не проходит валидацию
        """
        self.source = None
        data = self._load_yaml(config_file)
        self._apply_env(data)
        validated = validate_config(data, config_file=self.source or "config.yaml")
        self._data = validated.model_dump()


# Глобальный экземпляр
config = Config()


def load_config(config_file: Optional[str] = None) -> Config:
    """
    Загружает конфигурацию из файла.

    Args:
        config_file: Путь к YAML файлу (опционально)

    Returns:
        Config: Объект конфигурации
    """
    config.reload(config_file)
    return config
