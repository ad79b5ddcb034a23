"""
Persistence of per-instance flag values.

- IFlagAdapter: the fetch/create/update/replace contract a store implements
- PersistenceCache: lazily loaded, write-through cache of one owner's record
- Transaction: batched writes committed as one full replace
- InMemoryAdapter, JsonFileAdapter: reference stores
"""

from .adapter_interface import IFlagAdapter, OwnerIdentity, identity_for
from .persistence_cache import PersistenceCache
from .transaction import Transaction
from .memory_adapter import InMemoryAdapter
from .json_file_adapter import JsonFileAdapter

__all__ = [
    "IFlagAdapter",
    "OwnerIdentity",
    "identity_for",
    "PersistenceCache",
    "Transaction",
    "InMemoryAdapter",
    "JsonFileAdapter",
]
