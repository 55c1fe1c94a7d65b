"""
Санитизация значений фильтров.

Приводит сырые токены (MAC, port, VLAN, host) к каноническому виду,
в котором они хранятся в кэше. Некорректные значения отклоняются
через ValidationError.

Каноническая форма MAC: 12 hex-символов в нижнем регистре без
разделителей (aabbccddeeff). Порт и VLAN: строка из цифр как есть.
"""

import re
from typing import Callable, Dict

from ..exceptions import ValidationError

MAC_RAW_RE = re.compile(r"^[0-9a-f]{12}$")
DIGITS_RE = re.compile(r"^\d+$")

# Октет из одной цифры в начале, в середине или в конце адреса: a:2:34 → 0a:02:34
_SHORT_OCTET_RE = re.compile(r"(^|:)([0-9a-f])(?=:|$)")
_SEPARATORS_RE = re.compile(r"[ \-]")
_STRIP_RE = re.compile(r"[:.]")

Sanitiser = Callable[[str], str]


def sanitise_mac(value: str) -> str:
    """
    Приводит MAC-адрес к каноническому виду.

    Понимает разделители ":", "-", " ", "." и октеты без ведущего нуля,
    которые выдают некоторые коммутаторы (0:1b:2:a:...).

    Args:
        value: MAC-адрес в любом формате

    Returns:
        str: 12 символов в нижнем регистре (aabbccddeeff)

    Raises:
        ValidationError: Если адрес не сводится к 12 hex-символам
    """
    mac = str(value).strip().lower()
    mac = _SEPARATORS_RE.sub(":", mac)
    mac = _SHORT_OCTET_RE.sub(r"\g<1>0\g<2>", mac)
    mac = _STRIP_RE.sub("", mac)

    if not MAC_RAW_RE.match(mac):
        raise ValidationError(
            f"Invalid MAC address: {value!r}", category="mac", value=value,
        )
    return mac


def _sanitise_number(value: str, category: str, label: str) -> str:
    number = str(value).strip()
    if not DIGITS_RE.match(number):
        raise ValidationError(
            f"Invalid {label}: {value!r}", category=category, value=value,
        )
    return number


def sanitise_port(value: str) -> str:
    """Проверяет номер порта (только цифры), возвращает строку без изменений."""
    return _sanitise_number(value, "port", "port")


def sanitise_vlan(value: str) -> str:
    """Проверяет VLAN ID (только цифры), возвращает строку без изменений."""
    return _sanitise_number(value, "vlan", "VLAN")


def sanitise_host(value: str) -> str:
    """Hostname это непрозрачный ключ: только обрезаем пробелы."""
    return str(value).strip()


# Санитайзер для каждой категории фильтра
SANITISERS: Dict[str, Sanitiser] = {
    "mac": sanitise_mac,
    "port": sanitise_port,
    "vlan": sanitise_vlan,
    "host": sanitise_host,
}


def format_mac(mac: str, fmt: str = "raw") -> str:
    """
    Форматирует канонический MAC для вывода.

    Args:
        mac: MAC в каноническом виде (aabbccddeeff)
        fmt: Формат вывода:
            - "raw": aabbccddeeff
            - "ieee": aa:bb:cc:dd:ee:ff
            - "netbox": AA:BB:CC:DD:EE:FF
            - "cisco": aabb.ccdd.eeff
            - "unix": aa-bb-cc-dd-ee-ff

    Returns:
        str: MAC в указанном формате
    """
    octets = [mac[i : i + 2] for i in range(0, 12, 2)]

    if fmt == "raw":
        return mac
    elif fmt == "ieee":
        return ":".join(octets)
    elif fmt == "netbox":
        return ":".join(octets).upper()
    elif fmt == "cisco":
        return f"{mac[0:4]}.{mac[4:8]}.{mac[8:12]}"
    elif fmt == "unix":
        return "-".join(octets)
    raise ValueError(f"Неизвестный формат MAC: {fmt}")
