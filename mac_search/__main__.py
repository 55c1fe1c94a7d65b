"""
Точка входа для запуска модуля.

Позволяет запускать утилиту как:
    python -m mac_search [команда] [опции]

Примеры:
    python -m mac_search search --hosts sw1 --mac 00:1b:2c:3d:4e:5f
    python -m mac_search collect --hosts-file switches.txt --cache fdb.sqlite
"""

from .cli import main

if __name__ == "__main__":
    main()
