"""
Команда search.

Поиск MAC-адресов по кэшу FDB. Фильтр без значений (--mac, --vlan ...)
означает потоковый режим: значения читаются из stdin по одной строке
на запрос, поля через запятую в порядке mac, port, vlan.
"""

import logging
import sys

from ..utils import (
    build_output_options,
    get_collector,
    load_hosts,
    open_cache,
    populate_cache,
)
from ...core.domain import build_predicates
from ...core.exceptions import CollectorError, ConfigError, QueryError, ValidationError
from ...core.executor import QueryExecutor
from ...exporters import ResultFormatter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_FILTER = 2


def cmd_search(args, cfg, stdin=None, stdout=None, stderr=None) -> int:
    """
    Обработчик команды search.

    Returns:
        int: Код выхода (0 — успех, в том числе пустой результат)
    """
    formatter = ResultFormatter(
        out=stdout,
        err=stderr,
        options=build_output_options(args, cfg),
    )

    # Фильтры проверяем до опроса устройств
    try:
        predicates = build_predicates(
            {"mac": args.mac, "port": args.port, "vlan": args.vlan},
            exclusions=args.exclude,
        )
    except ValidationError as e:
        formatter.warn(f"Error: {e.message}")
        return EXIT_INVALID_FILTER

    try:
        store = open_cache(args, cfg)
    except QueryError as e:
        formatter.warn(f"Error: {e.message}")
        return EXIT_ERROR

    with store:
        try:
            hosts = load_hosts(args, cfg)
            populate_cache(
                store,
                hosts,
                get_collector(args, cfg),
                formatter,
                refresh=args.refresh or bool(cfg.cache.refresh),
            )
        except (CollectorError, ConfigError, QueryError) as e:
            formatter.warn(f"Error: {e}")
            return EXIT_ERROR

        executor = QueryExecutor(store, formatter)
        lines = (stdin if stdin is not None else sys.stdin) if predicates.streaming else None
        try:
            stats = executor.run(predicates, lines=lines)
        except QueryError as e:
            formatter.warn(f"Error: {e.message}")
            return EXIT_ERROR

    logger.info(
        f"Запросов: {stats.queries}, строк: {stats.rows}, "
        f"пустых: {stats.empty}, ошибок ввода: {stats.failed_lines}"
    )
    return EXIT_OK
