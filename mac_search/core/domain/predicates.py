"""
Построение набора условий для поиска по кэшу FDB.

Каждый фильтр (mac, port, vlan) находится в одном из трёх состояний:
- отсутствует (ключа нет или None): не участвует в запросе;
- литеральный (непустой список): условие IN по санитизированным значениям;
- потоковый (пустой список): условие "column = ?", значение для которого
  приходит позже, по одному на строку ввода.

Потоковые категории образуют список binder-ов в фиксированном порядке
mac, port, vlan. В этом же порядке ожидаются поля во входных строках.

Пример:
    predicates = build_predicates(
        {"mac": [], "vlan": ["10", "20"]},
        exclusions=["sw1:24"],
    )
    predicates.conditions
    # (Equality("mac"), Membership("vlan", ("10", "20")),
    #  NotBothEqual(("host", "sw1"), ("port", "24")))
    predicates.bind(["aa:bb:cc:dd:ee:ff"])  # {"mac": "aabbccddeeff"}
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from ..exceptions import ValidationError
from .sanitize import SANITISERS, Sanitiser, sanitise_host, sanitise_port

# Порядок категорий значим: в нём же идут поля потокового ввода
FILTER_CATEGORIES: Tuple[str, ...] = ("mac", "port", "vlan")


@dataclass(frozen=True)
class Membership:
    """column IN (values...)"""
    column: str
    values: Tuple[str, ...]


@dataclass(frozen=True)
class Equality:
    """column = <значение из строки ввода>"""
    column: str


@dataclass(frozen=True)
class NotBothEqual:
    """NOT (left.column = left.value AND right.column = right.value)"""
    left: Tuple[str, str]
    right: Tuple[str, str]


@dataclass(frozen=True)
class AlwaysTrue:
    """Пустой фильтр: выбирает весь кэш."""


Condition = Union[Membership, Equality, NotBothEqual, AlwaysTrue]


class Binder(NamedTuple):
    """Категория потокового фильтра и её санитайзер."""
    category: str
    sanitise: Sanitiser


@dataclass(frozen=True)
class PredicateSet:
    """
    Набор условий (конъюнкция) и binder-ы для потоковых категорий.

    Attributes:
        conditions: Условия в порядке построения
        binders: Binder-ы в порядке mac, port, vlan
    """
    conditions: Tuple[Condition, ...]
    binders: Tuple[Binder, ...] = ()

    @property
    def streaming(self) -> bool:
        """True если хотя бы один фильтр ожидает значения из потока."""
        return bool(self.binders)

    def bind(self, fields: Sequence[str]) -> Dict[str, str]:
        """
        Санитизирует поля одной строки ввода в порядке binder-ов.

        Лишние поля игнорируются.

        Args:
            fields: Поля строки (уже разделённые по запятой)

        Returns:
            Dict: {category: canonical value}

        Raises:
            ValidationError: Полей меньше чем binder-ов или поле некорректно
        """
        if len(fields) < len(self.binders):
            expected = ",".join(binder.category for binder in self.binders)
            raise ValidationError(
                f"Expected {len(self.binders)} field(s) ({expected}), "
                f"got {len(fields)}: {','.join(fields)!r}",
                category="line",
                value=",".join(fields),
            )
        return {
            binder.category: binder.sanitise(field)
            for binder, field in zip(self.binders, fields)
        }

    def describe(self, bound: Optional[Mapping[str, str]] = None) -> str:
        """
        Однострочное описание фильтров для диагностики.

        Args:
            bound: Значения потоковых категорий для текущей строки

        Returns:
            str: Например "mac=aabbccddeeff, vlan in (10, 20), not sw1:24"
        """
        bound = bound or {}
        parts: List[str] = []
        for condition in self.conditions:
            if isinstance(condition, Membership):
                if len(condition.values) == 1:
                    parts.append(f"{condition.column}={condition.values[0]}")
                else:
                    parts.append(f"{condition.column} in ({', '.join(condition.values)})")
            elif isinstance(condition, Equality):
                parts.append(f"{condition.column}={bound.get(condition.column, '?')}")
            elif isinstance(condition, NotBothEqual):
                parts.append(f"not {condition.left[1]}:{condition.right[1]}")
        return ", ".join(parts) if parts else "all records"


def _parse_exclusion(raw: str) -> NotBothEqual:
    """Разбирает "host:port" в условие NOT (host = h AND port = p)."""
    host, sep, port = str(raw).rpartition(":")
    host = sanitise_host(host)
    if not sep or not host or not port.strip():
        raise ValidationError(
            f"Invalid exclusion (expected HOST:PORT): {raw!r}",
            category="exclude",
            value=raw,
        )
    return NotBothEqual(("host", host), ("port", sanitise_port(port)))


def build_predicates(
    filters: Mapping[str, Optional[Sequence[str]]],
    exclusions: Optional[Sequence[str]] = None,
) -> PredicateSet:
    """
    Строит PredicateSet из спецификации фильтров.

    Чистая функция. Первое некорректное литеральное значение прерывает
    построение: по частично валидному фильтру намерение пользователя
    не определить.

    Args:
        filters: {category: None | [] | [raw values]} для mac, port, vlan
        exclusions: Список "host:port" для исключения

    Returns:
        PredicateSet: Условия и binder-ы

    Raises:
        ValidationError: Некорректное литеральное значение или пара исключения
    """
    conditions: List[Condition] = []
    binders: List[Binder] = []

    for category in FILTER_CATEGORIES:
        values = filters.get(category)
        if values is None:
            continue

        sanitise = SANITISERS[category]
        if len(values) == 0:
            conditions.append(Equality(category))
            binders.append(Binder(category, sanitise))
            continue

        # Дубликаты схлопываем с сохранением порядка
        sanitised = tuple(dict.fromkeys(sanitise(value) for value in values))
        conditions.append(Membership(category, sanitised))

    for raw in exclusions or ():
        conditions.append(_parse_exclusion(raw))

    if not conditions:
        conditions.append(AlwaysTrue())

    return PredicateSet(conditions=tuple(conditions), binders=tuple(binders))
