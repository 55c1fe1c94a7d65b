"""
Выполнение поиска по кэшу FDB.

Два режима, выбор только по наличию binder-ов в PredicateSet:
- batch: все фильтры литеральные или отсутствуют, запрос выполняется один раз;
- streaming: для каждой строки ввода поля санитизируются binder-ами
  по порядку и запрос выполняется с этими значениями.

Запрос компилируется один раз. Значения фильтров никогда не подставляются
в текст SQL: литеральные и потоковые значения передаются именованными
параметрами.

Пример использования:
    executor = QueryExecutor(store, ResultFormatter())
    stats = executor.run(build_predicates({"mac": []}), lines=sys.stdin)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .domain.predicates import (
    AlwaysTrue,
    Equality,
    Membership,
    NotBothEqual,
    PredicateSet,
)
from .exceptions import QueryError, ValidationError
from .models import QueryStats
from ..exporters.formatter import ResultFormatter
from ..storage.cache import CacheStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledQuery:
    """
    Условие WHERE с именованными параметрами.

    Attributes:
        where: Текст условия (:mac_0, :vlan, :x0_host ...)
        params: Значения литеральных параметров
    """
    where: str
    params: Dict[str, Any] = field(default_factory=dict)

    def with_bound(self, bound: Mapping[str, str]) -> Dict[str, Any]:
        """Параметры запроса с учётом значений текущей строки ввода."""
        return {**self.params, **bound}


def compile_predicates(predicates: PredicateSet) -> CompiledQuery:
    """
    Переводит условия в параметризованный SQL для SQLite.

    Membership → "mac IN (:mac_0, :mac_1)"
    Equality → "mac = :mac" (значение приходит из строки ввода)
    NotBothEqual → "NOT (host = :x0_host AND port = :x0_port)"
    AlwaysTrue → "1"

    Args:
        predicates: Набор условий

    Returns:
        CompiledQuery: Условие и литеральные параметры
    """
    clauses: List[str] = []
    params: Dict[str, Any] = {}
    exclusion = 0

    for condition in predicates.conditions:
        if isinstance(condition, Membership):
            names = []
            for idx, value in enumerate(condition.values):
                name = f"{condition.column}_{idx}"
                params[name] = value
                names.append(f":{name}")
            clauses.append(f"{condition.column} IN ({', '.join(names)})")
        elif isinstance(condition, Equality):
            # Имя параметра совпадает с категорией: его заполняет bind()
            clauses.append(f"{condition.column} = :{condition.column}")
        elif isinstance(condition, NotBothEqual):
            (left_col, left_val), (right_col, right_val) = condition.left, condition.right
            left_name = f"x{exclusion}_{left_col}"
            right_name = f"x{exclusion}_{right_col}"
            params[left_name] = left_val
            params[right_name] = right_val
            clauses.append(
                f"NOT ({left_col} = :{left_name} AND {right_col} = :{right_name})"
            )
            exclusion += 1
        elif isinstance(condition, AlwaysTrue):
            clauses.append("1")
        else:
            raise TypeError(f"Неизвестный тип условия: {condition!r}")

    return CompiledQuery(where=" AND ".join(clauses) or "1", params=params)


class QueryExecutor:
    """
    Выполняет PredicateSet против CacheStore и передаёт строки в ResultFormatter.

    Attributes:
        store: Кэш FDB
        formatter: Вывод результатов и диагностики
    """

    def __init__(self, store: CacheStore, formatter: ResultFormatter):
        self.store = store
        self.formatter = formatter

    def run(
        self,
        predicates: PredicateSet,
        lines: Optional[Iterable[str]] = None,
    ) -> QueryStats:
        """
        Выполняет поиск.

        Args:
            predicates: Набор условий
            lines: Строки ввода для потокового режима (например sys.stdin)

        Returns:
            QueryStats: Статистика выполнения

        Raises:
            QueryError: Ошибка запроса в batch режиме
        """
        compiled = compile_predicates(predicates)
        self.formatter.debug(f"WHERE {compiled.where}")

        if not predicates.streaming:
            return self._run_batch(predicates, compiled)
        return self._run_streaming(predicates, compiled, lines or ())

    def _run_batch(self, predicates: PredicateSet, compiled: CompiledQuery) -> QueryStats:
        stats = QueryStats()
        description = predicates.describe()
        self.formatter.debug(f"Параметры: {compiled.params}")

        rows = self.store.execute(compiled.where, compiled.params)
        self._record(stats, self.formatter.write_result(rows, description))
        logger.debug(f"Batch запрос: {stats.rows} строк")
        return stats

    def _run_streaming(
        self,
        predicates: PredicateSet,
        compiled: CompiledQuery,
        lines: Iterable[str],
    ) -> QueryStats:
        stats = QueryStats()

        for lineno, line in enumerate(lines, start=1):
            fields = line.rstrip("\r\n").split(",")

            try:
                bound = predicates.bind(fields)
            except ValidationError as e:
                stats.failed_lines += 1
                self.formatter.warn(f"Line {lineno}: {e.message}")
                continue

            params = compiled.with_bound(bound)
            description = predicates.describe(bound)
            self.formatter.debug(f"Line {lineno}: параметры {params}")

            try:
                rows = self.store.execute(compiled.where, params)
                written = self.formatter.write_result(rows, description)
            except QueryError as e:
                stats.failed_lines += 1
                self.formatter.warn(f"Line {lineno}: query failed for {description}: {e.message}")
                continue

            self._record(stats, written)

        logger.debug(
            f"Потоковый режим: {stats.queries} запросов, {stats.rows} строк, "
            f"{stats.failed_lines} ошибок"
        )
        return stats

    @staticmethod
    def _record(stats: QueryStats, written: int) -> None:
        stats.queries += 1
        stats.rows += written
        if written == 0:
            stats.empty += 1
