"""
MAC Search — поиск MAC-адресов в таблицах FDB коммутаторов.

Собирает FDB (host, port, mac, vlan) с коммутаторов по SNMP,
кэширует в SQLite и отвечает на запросы с фильтрами по MAC,
порту, VLAN и исключаемым парам host:port.
"""

__version__ = "0.1.0"
