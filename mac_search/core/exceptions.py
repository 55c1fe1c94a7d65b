"""
Типизированные исключения для MAC Search.

Иерархия:
    MacSearchError (базовый)
    ├── ValidationError (некорректный MAC/port/vlan/host или пара исключения)
    ├── QueryError (ошибка выполнения запроса к кэшу)
    ├── CollectorError (сбор FDB с устройства)
    │   └── SNMPError (ошибка SNMP walk)
    └── ConfigError (конфигурация)

Пример использования:
    from mac_search.core.exceptions import ValidationError, QueryError

    try:
        predicates = build_predicates({"mac": ["zz:zz"]})
    except ValidationError as e:
        logger.error(f"Фильтр {e.category}: {e.message}")
"""

from typing import Optional


class MacSearchError(Exception):
    """
    Базовое исключение для всех ошибок MAC Search.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(MacSearchError):
    """
    Некорректное значение фильтра.

    Сообщение уже содержит само значение, поэтому str() не дублирует details.

    Attributes:
        category: Категория фильтра (mac, port, vlan, host, exclude)
        value: Значение которое не прошло проверку

    Пример:
        raise ValidationError("Invalid MAC address: 'zz'", category="mac", value="zz")
    """

    def __init__(
        self,
        message: str,
        category: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.category = category
        self.value = value
        details = details or {}
        if category:
            details["category"] = category
        if value is not None:
            details["value"] = str(value)[:100]
        super().__init__(message, details)

    def __str__(self) -> str:
        return self.message


class QueryError(MacSearchError):
    """
    Ошибка выполнения запроса к кэшу.

    Attributes:
        operation: Операция (select, insert, create)
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.operation = operation
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class CollectorError(MacSearchError):
    """
    Ошибка при сборе FDB с устройства.

    Attributes:
        device: IP или hostname устройства
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.device = device
        details = details or {}
        if device:
            details["device"] = device
        super().__init__(message, details)


class SNMPError(CollectorError):
    """
    Ошибка SNMP запроса (timeout, noSuchName, authorizationError).

    Attributes:
        oid: OID таблицы которую обходили

    Пример:
        raise SNMPError("No SNMP response received before timeout", device="sw1", oid="1.3.6.1...")
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        oid: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.oid = oid
        details = details or {}
        if oid:
            details["oid"] = oid
        super().__init__(message, device, details)


class ConfigError(MacSearchError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Missing required field", config_file="config.yaml", key="snmp.community")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, MacSearchError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
