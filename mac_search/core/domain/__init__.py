"""
Domain logic для поиска MAC.

Санитизация значений фильтров и построение набора условий.
Не зависит от SNMP/SQLite — работает только с сырыми строками.
"""

from .sanitize import (
    SANITISERS,
    format_mac,
    sanitise_host,
    sanitise_mac,
    sanitise_port,
    sanitise_vlan,
)
from .predicates import (
    FILTER_CATEGORIES,
    AlwaysTrue,
    Binder,
    Condition,
    Equality,
    Membership,
    NotBothEqual,
    PredicateSet,
    build_predicates,
)

__all__ = [
    "SANITISERS",
    "format_mac",
    "sanitise_host",
    "sanitise_mac",
    "sanitise_port",
    "sanitise_vlan",
    "FILTER_CATEGORIES",
    "AlwaysTrue",
    "Binder",
    "Condition",
    "Equality",
    "Membership",
    "NotBothEqual",
    "PredicateSet",
    "build_predicates",
]
