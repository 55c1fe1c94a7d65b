"""
Кэш FDB в SQLite.

Одна таблица fdb(host, port, mac, vlan). Все значения хранятся строками
в каноническом виде, чтобы сравнение с санитизированными фильтрами было
точным. По умолчанию база в памяти и живёт до конца процесса; файл
кэша позволяет переиспользовать собранные данные между запусками.

Пример использования:
    with CacheStore("fdb.sqlite") as store:
        store.load(records)
        for row in store.execute("mac = :mac", {"mac": "aabbccddeeff"}):
            print(row)  # ("sw1", "24", "aabbccddeeff", "10")
"""

import logging
import sqlite3
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..core.exceptions import QueryError
from ..core.models import COLUMNS, ForwardingRecord

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS fdb ("
    " host TEXT NOT NULL,"
    " port TEXT NOT NULL,"
    " mac TEXT NOT NULL,"
    " vlan TEXT NOT NULL"
    ")",
    "CREATE INDEX IF NOT EXISTS fdb_mac ON fdb (mac)",
    "CREATE INDEX IF NOT EXISTS fdb_host_port ON fdb (host, port)",
)

_SELECT = (
    f"SELECT {', '.join(COLUMNS)} FROM fdb WHERE {{where}} "
    "ORDER BY host, CAST(port AS INTEGER), CAST(vlan AS INTEGER), mac"
)


class CacheStore:
    """
    Хранилище записей FDB.

    Однопоточное: сначала load(), затем запросы. Блокировки не нужны.

    Attributes:
        path: Путь к файлу SQLite или ":memory:"
    """

    def __init__(self, path: str = MEMORY):
        self.path = path or MEMORY
        try:
            self._conn = sqlite3.connect(self.path)
            with self._conn:
                for statement in _SCHEMA:
                    self._conn.execute(statement)
        except sqlite3.Error as e:
            raise QueryError(f"Не удалось открыть кэш {self.path}: {e}", operation="open")
        logger.debug(f"Кэш открыт: {self.path}")

    def __enter__(self) -> "CacheStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def persistent(self) -> bool:
        """True если кэш хранится в файле."""
        return self.path != MEMORY

    def load(self, records: Iterable[ForwardingRecord]) -> int:
        """
        Вставляет записи одной транзакцией.

        Args:
            records: Записи FDB

        Returns:
            int: Количество вставленных записей
        """
        rows = [record.to_row() for record in records]
        try:
            with self._conn:
                self._conn.executemany(
                    "INSERT INTO fdb (host, port, mac, vlan) VALUES (?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as e:
            raise QueryError(f"Ошибка загрузки в кэш: {e}", operation="insert")
        logger.debug(f"Загружено в кэш: {len(rows)} записей")
        return len(rows)

    def replace(self, records: Iterable[ForwardingRecord]) -> int:
        """
        Заменяет содержимое кэша одной транзакцией.

        При ошибке вставки старые записи остаются на месте.

        Args:
            records: Новые записи FDB

        Returns:
            int: Количество вставленных записей
        """
        rows = [record.to_row() for record in records]
        try:
            with self._conn:
                self._conn.execute("DELETE FROM fdb")
                self._conn.executemany(
                    "INSERT INTO fdb (host, port, mac, vlan) VALUES (?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as e:
            raise QueryError(f"Ошибка обновления кэша: {e}", operation="replace")
        logger.debug(f"Кэш заменён: {len(rows)} записей")
        return len(rows)

    def clear(self) -> None:
        """Удаляет все записи (перед повторным сбором)."""
        try:
            with self._conn:
                self._conn.execute("DELETE FROM fdb")
        except sqlite3.Error as e:
            raise QueryError(f"Ошибка очистки кэша: {e}", operation="delete")

    def count(self) -> int:
        """Количество записей в кэше."""
        return self._scalar("SELECT COUNT(*) FROM fdb")

    def is_empty(self) -> bool:
        return self.count() == 0

    def hosts(self) -> List[str]:
        """Список коммутаторов, данные которых есть в кэше."""
        try:
            cursor = self._conn.execute("SELECT DISTINCT host FROM fdb ORDER BY host")
            return [row[0] for row in cursor]
        except sqlite3.Error as e:
            raise QueryError(f"Ошибка чтения кэша: {e}", operation="select")

    def execute(
        self,
        where: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Iterator[Tuple[str, str, str, str]]:
        """
        Выполняет SELECT с заданным условием WHERE.

        Строки отдаются лениво, по мере чтения курсора.

        Args:
            where: Условие с именованными параметрами (:name)
            params: Значения параметров

        Yields:
            tuple: (host, port, mac, vlan)

        Raises:
            QueryError: Ошибка SQLite
        """
        sql = _SELECT.format(where=where)
        params = dict(params or {})
        try:
            cursor = self._conn.execute(sql, params)
        except sqlite3.OperationalError as e:
            if "too many SQL variables" in str(e):
                raise QueryError(
                    f"Too many literal values in filter ({len(params)} parameters "
                    f"exceed the SQLite limit): {e}",
                    operation="select",
                )
            raise QueryError(f"Ошибка запроса к кэшу: {e}", operation="select")
        except sqlite3.Error as e:
            raise QueryError(f"Ошибка запроса к кэшу: {e}", operation="select")
        return self._iterate(cursor)

    def _iterate(self, cursor: sqlite3.Cursor) -> Iterator[Tuple[str, str, str, str]]:
        try:
            for row in cursor:
                yield tuple(row)
        except sqlite3.Error as e:
            raise QueryError(f"Ошибка чтения результата: {e}", operation="select")

    def _scalar(self, sql: str) -> int:
        try:
            return self._conn.execute(sql).fetchone()[0]
        except sqlite3.Error as e:
            raise QueryError(f"Ошибка чтения кэша: {e}", operation="select")

    def close(self) -> None:
        """Закрывает соединение."""
        self._conn.close()
