"""
Ядро MAC Search.

- models.py: ForwardingRecord, OutputOptions, QueryStats
- exceptions.py: иерархия исключений
- domain/: санитизация и построение условий
- executor.py: выполнение запросов (batch / потоковый режим)
- config_schema.py: pydantic схемы config.yaml
- logging.py: настройка логирования
"""

from .exceptions import (
    MacSearchError,
    ValidationError,
    QueryError,
    CollectorError,
    SNMPError,
    ConfigError,
)
from .models import ForwardingRecord, OutputOptions, QueryStats

__all__ = [
    "MacSearchError",
    "ValidationError",
    "QueryError",
    "CollectorError",
    "SNMPError",
    "ConfigError",
    "ForwardingRecord",
    "OutputOptions",
    "QueryStats",
]
