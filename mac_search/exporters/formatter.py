"""
Вывод результатов поиска.

Данные и диагностика идут в два независимых потока:
- out (по умолчанию stdout): заголовок и строки результата;
- err (по умолчанию stderr): "No results ...", ошибки строк ввода, verbose.

Это позволяет перенаправлять их раздельно:
    mac-search search --mac < macs.txt > found.csv 2> warnings.log

Пример использования:
    formatter = ResultFormatter(options=OutputOptions(mac_format="ieee"))
    formatter.write_result(rows, "mac=aabbccddeeff")
"""

import csv
import logging
import sys
from typing import Iterable, Optional, Sequence, TextIO

from ..core.domain.sanitize import format_mac
from ..core.models import HEADER, OutputOptions

logger = logging.getLogger(__name__)


class ResultFormatter:
    """
    Форматирует наборы строк (host, port, mac, vlan) как текст с разделителем.

    Заголовок выводится перед первой строкой каждого набора, поэтому
    пустой результат не оставляет в выводе одинокий заголовок.

    Attributes:
        out: Поток данных
        err: Поток диагностики
        options: Настройки вывода
    """

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        options: Optional[OutputOptions] = None,
    ):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.options = options or OutputOptions()
        # Поля с разделителем берутся в кавычки
        self._writer = csv.writer(
            self.out,
            delimiter=self.options.delimiter,
            lineterminator="\n",
        )

    def write_result(self, rows: Iterable[Sequence[str]], description: str = "") -> int:
        """
        Выводит один набор результатов.

        Args:
            rows: Строки (host, port, mac, vlan), можно генератор
            description: Описание запроса для сообщения о пустом результате

        Returns:
            int: Количество выведенных строк
        """
        written = 0
        for row in rows:
            if written == 0 and not self.options.suppress_header:
                self._write_line(HEADER)
            self._write_line(self._format_row(row))
            written += 1

        if written == 0:
            logger.debug(f"Нет результатов: {description}")
            if not self.options.suppress_no_results:
                self.warn(f"No results for {description or 'query'}")
        return written

    def warn(self, message: str) -> None:
        """Диагностическое сообщение (всегда выводится)."""
        self.err.write(f"{message}\n")

    def debug(self, message: str) -> None:
        """Диагностическое сообщение только в verbose режиме."""
        if self.options.verbose:
            self.err.write(f"{message}\n")

    def _format_row(self, row: Sequence[str]) -> Sequence[str]:
        host, port, mac, vlan = row
        return (host, port, format_mac(mac, self.options.mac_format), vlan)

    def _write_line(self, fields: Sequence[str]) -> None:
        self._writer.writerow(fields)
