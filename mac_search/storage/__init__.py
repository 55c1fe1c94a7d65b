"""
Хранилище собранных данных FDB.

- cache.py: CacheStore на SQLite (в памяти или в файле)
"""

from .cache import CacheStore, MEMORY

__all__ = ["CacheStore", "MEMORY"]
