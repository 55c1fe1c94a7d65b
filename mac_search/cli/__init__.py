"""
CLI модуль mac_search.

Структура:
- utils.py: общие утилиты (load_hosts, open_cache, populate_cache)
- commands/: обработчики команд
  - search.py: search
  - collect.py: collect

Примеры использования:
    python -m mac_search search --hosts sw1 sw2 --mac 00:1b:2c:3d:4e:5f
    python -m mac_search search --cache fdb.sqlite --mac < macs.txt
    python -m mac_search collect --hosts-file switches.txt --cache fdb.sqlite
"""

import argparse
import logging
import sys
from typing import List, Optional

from .commands import cmd_collect, cmd_search, EXIT_ERROR
from .utils import load_hosts, open_cache, populate_cache

logger = logging.getLogger(__name__)


def _delimiter(value: str) -> str:
    """Тип аргумента --delimiter: ровно один символ."""
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"разделитель должен быть одним символом: {value!r}")
    return value


def _common_parser() -> argparse.ArgumentParser:
    """Аргументы источника данных, общие для search и collect."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--hosts",
        nargs="+",
        metavar="HOST",
        help="Коммутаторы для опроса",
    )
    common.add_argument(
        "--hosts-file",
        help="Файл со списком коммутаторов (по одному на строку)",
    )
    common.add_argument(
        "--cache",
        metavar="PATH",
        help="Файл кэша SQLite (по умолчанию в памяти)",
    )
    common.add_argument(
        "--community",
        help="SNMP community (по умолчанию из config.yaml)",
    )
    return common


def setup_parser() -> argparse.ArgumentParser:
    """
    Создаёт парсер аргументов командной строки.

    Returns:
        ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog="mac-search",
        description="Поиск MAC-адресов в таблицах FDB коммутаторов (SNMP Q-BRIDGE-MIB)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  %(prog)s search --hosts sw1 sw2 --mac 00:1b:2c:3d:4e:5f
  %(prog)s search --cache fdb.sqlite --vlan 10 20 -x sw1:24
  %(prog)s search --cache fdb.sqlite --mac --vlan < mac_vlan.csv
  %(prog)s collect --hosts-file switches.txt --cache fdb.sqlite
        """,
    )

    # Общие аргументы
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Подробный вывод (DEBUG)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Путь к файлу конфигурации YAML (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Команды")
    common = _common_parser()

    # === SEARCH ===
    search_parser = subparsers.add_parser(
        "search",
        parents=[common],
        help="Поиск по FDB",
        description=(
            "Фильтр без значений читается из stdin: одна строка — один запрос, "
            "поля через запятую в порядке mac, port, vlan."
        ),
    )
    search_parser.add_argument(
        "--mac",
        nargs="*",
        default=None,
        help="MAC-адреса (без значений — из stdin)",
    )
    search_parser.add_argument(
        "--port",
        nargs="*",
        default=None,
        help="Номера bridge-портов (без значений — из stdin)",
    )
    search_parser.add_argument(
        "--vlan",
        nargs="*",
        default=None,
        help="VLAN ID (без значений — из stdin)",
    )
    search_parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        metavar="HOST:PORT",
        help="Исключить порт коммутатора (можно несколько раз)",
    )
    search_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Опросить устройства даже если файл кэша не пуст",
    )
    search_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Не сообщать о пустых результатах",
    )
    search_parser.add_argument(
        "-H",
        "--no-header",
        action="store_true",
        help="Не выводить заголовок",
    )
    search_parser.add_argument(
        "--mac-format",
        choices=["raw", "ieee", "cisco", "unix", "netbox"],
        default=None,
        help="Формат MAC в выводе (по умолчанию из config.yaml)",
    )
    search_parser.add_argument(
        "--delimiter",
        type=_delimiter,
        default=None,
        help="Разделитель колонок (по умолчанию ',')",
    )

    # === COLLECT ===
    subparsers.add_parser(
        "collect",
        parents=[common],
        help="Опросить коммутаторы и сохранить FDB в кэш",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Главная функция CLI."""
    from ..config import load_config
    from ..core.exceptions import ConfigError
    from ..core.logging import LogConfig, setup_logging_from_config

    parser = setup_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_ERROR)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.exit(EXIT_ERROR)

    # Приоритет: -v флаг > config.yaml > WARNING по умолчанию
    log_config = LogConfig.from_dict(cfg.logging.to_dict())
    if args.verbose:
        log_config.level = logging.DEBUG
    setup_logging_from_config(log_config)

    logger.debug(f"Run started (command={args.command}, config={cfg.source})")

    if args.command == "search":
        code = cmd_search(args, cfg)
    else:
        code = cmd_collect(args, cfg)

    sys.exit(code)


__all__ = [
    # Utils
    "load_hosts",
    "open_cache",
    "populate_cache",
    # Commands
    "cmd_search",
    "cmd_collect",
    # Entry points
    "setup_parser",
    "main",
]
