"""
Команда collect.

Опрашивает устройства и сохраняет FDB в файл кэша для последующих
запусков search без повторного опроса.
"""

import logging
import sys

from ..utils import get_collector, load_hosts, open_cache, populate_cache
from ...core.exceptions import CollectorError, ConfigError, QueryError
from ...exporters import ResultFormatter
from .search import EXIT_ERROR, EXIT_OK

logger = logging.getLogger(__name__)


def cmd_collect(args, cfg, stdout=None, stderr=None) -> int:
    """Обработчик команды collect (всегда опрашивает заново)."""
    formatter = ResultFormatter(out=stdout, err=stderr)

    try:
        store = open_cache(args, cfg)
    except QueryError as e:
        formatter.warn(f"Error: {e.message}")
        return EXIT_ERROR

    with store:
        if not store.persistent:
            formatter.warn("Warning: кэш в памяти, данные будут потеряны после выхода (--cache PATH)")
        try:
            result = populate_cache(
                store,
                load_hosts(args, cfg),
                get_collector(args, cfg),
                formatter,
                refresh=True,
            )
        except (CollectorError, ConfigError, QueryError) as e:
            formatter.warn(f"Error: {e}")
            return EXIT_ERROR

        out = stdout if stdout is not None else sys.stdout
        out.write(
            f"Collected {len(result.records)} records from "
            f"{len(store.hosts())} host(s), {len(result.errors)} failed\n"
        )

    return EXIT_OK
