"""
CLI команды.

- search.py: search (поиск по кэшу, batch или потоковый режим)
- collect.py: collect (опрос устройств в файл кэша)
"""

from .search import cmd_search, EXIT_OK, EXIT_ERROR, EXIT_INVALID_FILTER
from .collect import cmd_collect

__all__ = [
    "cmd_search",
    "cmd_collect",
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_INVALID_FILTER",
]
