"""
Утилиты CLI.

Общие функции для команд search и collect: список устройств,
настройки вывода, коллектор и заполнение кэша.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..collectors import CollectionResult, FdbCollector
from ..core.exceptions import CollectorError, ConfigError
from ..core.models import OutputOptions
from ..exporters import ResultFormatter
from ..storage import CacheStore, MEMORY

logger = logging.getLogger(__name__)


def _pick(value, default):
    """Значение из CLI имеет приоритет над config.yaml."""
    return default if value is None else value


def load_hosts(args, cfg) -> List[str]:
    """
    Собирает список устройств: --hosts, --hosts-file, затем hosts из config.yaml.

    Файл устройств: по одному hostname/IP на строку, # — комментарий.

    Raises:
        ConfigError: Файл устройств не найден
    """
    hosts: List[str] = list(getattr(args, "hosts", None) or [])

    hosts_file = getattr(args, "hosts_file", None)
    if hosts_file:
        path = Path(hosts_file)
        if not path.exists():
            raise ConfigError("Файл устройств не найден", config_file=hosts_file)
        for line in path.read_text(encoding="utf-8").splitlines():
            host = line.split("#", 1)[0].strip()
            if host:
                hosts.append(host)

    if not hosts:
        hosts = list(cfg.hosts or [])

    # Дубликаты убираем с сохранением порядка
    return list(dict.fromkeys(hosts))


def build_output_options(args, cfg) -> OutputOptions:
    """Настройки вывода из аргументов и секции output."""
    output = cfg.output
    return OutputOptions(
        suppress_header=bool(getattr(args, "no_header", False) or output.suppress_header),
        suppress_no_results=bool(getattr(args, "quiet", False) or output.quiet),
        verbose=bool(getattr(args, "verbose", False)),
        delimiter=_pick(getattr(args, "delimiter", None), output.delimiter),
        mac_format=_pick(getattr(args, "mac_format", None), output.mac_format),
    )


def get_collector(args, cfg) -> FdbCollector:
    """Создаёт SNMP коллектор из аргументов и секции snmp."""
    snmp = cfg.snmp
    return FdbCollector(
        community=_pick(getattr(args, "community", None), snmp.community),
        version=snmp.version,
        port=snmp.port,
        timeout=snmp.timeout,
        retries=snmp.retries,
        max_workers=snmp.max_workers,
    )


def open_cache(args, cfg) -> CacheStore:
    """Открывает кэш: --cache, cache.path из конфига или база в памяти."""
    path = _pick(getattr(args, "cache", None), cfg.cache.path) or MEMORY
    return CacheStore(path)


def populate_cache(
    store: CacheStore,
    hosts: List[str],
    collector: FdbCollector,
    formatter: ResultFormatter,
    refresh: bool = False,
) -> Optional[CollectionResult]:
    """
    Заполняет кэш данными с устройств.

    Непустой файл кэша переиспользуется без опроса, если не задан refresh.
    Ошибки отдельных устройств выводятся как предупреждения. Если опрос не вернул
    ни одной записи и были ошибки, содержимое кэша остаётся прежним.

    Returns:
        CollectionResult или None если кэш переиспользован

    Raises:
        CollectorError: Нет устройств для опроса
    """
    if store.persistent and not refresh and not store.is_empty():
        logger.info(f"Используется кэш {store.path}: {store.count()} записей")
        return None

    if not hosts:
        raise CollectorError("Нет устройств для опроса (--hosts, --hosts-file или hosts в config.yaml)")

    result = collector.collect(hosts)
    for warning in result.warnings():
        formatter.warn(f"Warning: {warning}")

    if not result.records and result.errors:
        # Ни одной записи и есть ошибки: собранные ранее данные не затираем
        formatter.warn(
            f"Warning: опрос не вернул записей, кэш не изменён "
            f"({store.count()} записей)"
        )
        return result

    store.replace(result.records)
    logger.info(f"В кэше {store.count()} записей с {len(store.hosts())} устройств")
    return result
