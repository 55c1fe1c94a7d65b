"""
Модули вывода данных.

Пример использования:
    from mac_search.exporters import ResultFormatter

    formatter = ResultFormatter(options=OutputOptions(suppress_header=True))
    formatter.write_result(rows, "mac=aabbccddeeff")
"""

from .formatter import ResultFormatter

__all__ = ["ResultFormatter"]
