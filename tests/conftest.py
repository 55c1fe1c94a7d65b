"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- records: Записи FDB с двух коммутаторов
- store: Кэш в памяти, заполненный records
- out / err: Потоки вывода данных и диагностики
- formatter: ResultFormatter поверх out / err
"""

import logging
from io import StringIO
from typing import List

import pytest

from mac_search.core.models import ForwardingRecord, OutputOptions
from mac_search.exporters import ResultFormatter
from mac_search.storage import CacheStore


@pytest.fixture
def records() -> List[ForwardingRecord]:
    """
    Записи FDB для тестов.

    aabbccddeeff виден на обоих коммутаторах (uplink),
    остальные MAC — только на одном порту.
    """
    return [
        ForwardingRecord("sw1", "1", "aabbccddeeff", "10"),
        ForwardingRecord("sw2", "2", "aabbccddeeff", "20"),
        ForwardingRecord("sw1", "24", "001122334455", "10"),
        ForwardingRecord("sw2", "24", "001122334466", "30"),
    ]


@pytest.fixture
def store(records):
    """Кэш в памяти с записями из records."""
    cache = CacheStore()
    cache.load(records)
    yield cache
    cache.close()


@pytest.fixture
def out() -> StringIO:
    """Поток данных."""
    return StringIO()


@pytest.fixture
def err() -> StringIO:
    """Поток диагностики."""
    return StringIO()


@pytest.fixture
def formatter(out, err) -> ResultFormatter:
    """ResultFormatter с настройками по умолчанию."""
    return ResultFormatter(out=out, err=err, options=OutputOptions())


@pytest.fixture
def restore_logging():
    """Восстанавливает handlers root logger после теста."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
