"""
Коллекторы FDB.

- base.py: BaseCollector (параллельный опрос, сбор ошибок по устройствам)
- fdb.py: FdbCollector (SNMP, Q-BRIDGE-MIB dot1qTpFdbPort)
"""

from .base import BaseCollector, CollectionResult
from .fdb import FdbCollector

__all__ = ["BaseCollector", "CollectionResult", "FdbCollector"]
