"""
Data Models для MAC Search.

Типизированные dataclasses вместо кортежей и словарей.

Использование:
    from mac_search.core.models import ForwardingRecord, OutputOptions

    # Создание из сырых значений (например, от SNMP коллектора)
    record = ForwardingRecord.from_raw("sw1", "24", "00:1B:2C:3D:4E:5F", "10")
    record.mac  # "001b2c3d4e5f"

    # Кортеж для вставки в кэш
    record.to_row()  # ("sw1", "24", "001b2c3d4e5f", "10")
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

from .domain.sanitize import sanitise_host, sanitise_mac, sanitise_port, sanitise_vlan

# Порядок колонок в SELECT и в выводе
COLUMNS: Tuple[str, ...] = ("host", "port", "mac", "vlan")
HEADER: Tuple[str, ...] = ("Host", "Port", "MAC", "VLAN")

MAC_FORMATS: Tuple[str, ...] = ("raw", "ieee", "cisco", "unix", "netbox")


@dataclass(frozen=True)
class ForwardingRecord:
    """
    Запись FDB одного коммутатора.

    Attributes:
        host: Hostname или IP коммутатора
        port: Номер bridge-порта (строка из цифр)
        mac: MAC в каноническом виде (aabbccddeeff)
        vlan: VLAN ID (строка из цифр)
    """
    host: str
    port: str
    mac: str
    vlan: str

    @classmethod
    def from_raw(cls, host: Any, port: Any, mac: Any, vlan: Any) -> "ForwardingRecord":
        """
        Создаёт запись, пропуская каждое поле через санитайзер.

        Raises:
            ValidationError: Если какое-либо поле некорректно
        """
        return cls(
            host=sanitise_host(str(host)),
            port=sanitise_port(str(port)),
            mac=sanitise_mac(str(mac)),
            vlan=sanitise_vlan(str(vlan)),
        )

    def to_row(self) -> Tuple[str, str, str, str]:
        """Кортеж в порядке COLUMNS."""
        return (self.host, self.port, self.mac, self.vlan)

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь."""
        return asdict(self)


@dataclass(frozen=True)
class OutputOptions:
    """
    Настройки вывода результатов.

    Передаются в ResultFormatter и QueryExecutor явно,
    вместо глобальных флагов quiet/verbose.

    Attributes:
        suppress_header: Не выводить строку заголовка
        suppress_no_results: Не сообщать о пустом результате
        verbose: Подробная диагностика (запросы, параметры)
        delimiter: Разделитель колонок
        mac_format: Формат MAC в выводе (raw, ieee, cisco, unix, netbox)
    """
    suppress_header: bool = False
    suppress_no_results: bool = False
    verbose: bool = False
    delimiter: str = ","
    mac_format: str = "raw"


@dataclass
class QueryStats:
    """
    Статистика выполнения запросов.

    Attributes:
        queries: Сколько запросов выполнено
        rows: Сколько строк выведено
        empty: Сколько запросов вернули пустой результат
        failed_lines: Сколько строк ввода пропущено из-за ошибок
    """
    queries: int = 0
    rows: int = 0
    empty: int = 0
    failed_lines: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь."""
        return asdict(self)
