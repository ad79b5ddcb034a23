"""
Per-instance cache of persisted flag overrides.

The cache fetches the owner's record once, on first use, and mirrors every
write it issues so that later reads never need another round trip. A
``reload`` drops the cached map; the next read fetches again.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..evaluation_context import EvaluationContext, coerce
from .adapter_interface import IFlagAdapter, OwnerIdentity

logger = logging.getLogger(__name__)

_OMITTED = object()


class PersistenceCache:
    """
    Lazily loaded view of one owner's persisted flag record.

    Args:
        adapter: Store implementing fetch/create/update/replace
        owner: Identity of the record this cache mirrors
        context: Evaluation context used for computed values
    """

    def __init__(self, adapter: IFlagAdapter, owner: OwnerIdentity, context: EvaluationContext):
        self.adapter = adapter
        self.owner = owner
        self.context = context
        self._loaded = False
        self._values: Optional[Dict[str, bool]] = None

    def persisted_flags(self) -> Optional[Dict[str, bool]]:
        """Return the cached record, fetching it on first access; None means no record yet."""
        if not self._loaded:
            fetched = self.adapter.fetch(self.owner)
            self._values = None if fetched is None else dict(fetched)
            self._loaded = True
            if logger.isEnabledFor(logging.DEBUG):
                state = "no record" if fetched is None else f"{len(fetched)} persisted flags"
                logger.debug(f"Loaded flag record for {self.owner}: {state}")
        return self._values

    def has_record(self) -> bool:
        return self.persisted_flags() is not None

    def is_persisted(self, name: Optional[str] = None, value: Any = _OMITTED) -> bool:
        """
        Check whether a record exists, or whether ``name`` is persisted in it.

        Args:
            name: Flag to look for; when omitted, asks whether any record exists
            value: When given, the persisted value must also equal it

        Returns:
            bool: True if the record (or flag, or flag with that value) is persisted
        """
        values = self.persisted_flags()
        if name is None:
            return values is not None
        if values is None or name not in values:
            return False
        return value is _OMITTED or values[name] == value

    def persisted_value(self, name: str) -> Optional[bool]:
        values = self.persisted_flags()
        return None if values is None else values.get(name)

    def check(self, name: str, *args: Any) -> bool:
        """
        Resolve ``name`` with persisted values taking precedence.

        A persisted value is authoritative for argument-free flags. For flags
        whose computation requires arguments it is a gate: persisted False
        short-circuits without invoking the computation, persisted True
        evaluates the chain with the given arguments.
        """
        if not self.is_persisted(name):
            return self.context.check(name, *args)
        persisted = bool(self.persisted_value(name))
        if self.context.requires_arguments(name):
            return persisted and self.context.check(name, *args)
        # Validates the name even when the stored value wins
        self.context.registry.chain_for(name)
        return persisted

    def persist(self, name: str, *args: Any) -> None:
        """Persist the value the chain computes for ``name``, ignoring any stored value."""
        self.write({name: self.context.check(name, *args)})

    def set(self, name: str, value: Any) -> None:
        self.context.registry.chain_for(name)
        self.write({name: coerce(value)})

    def enable(self, name: str) -> None:
        self.set(name, True)

    def disable(self, name: str) -> None:
        self.set(name, False)

    def reset(self, name: str) -> bool:
        """
        Remove ``name`` from the record so it falls back to its computed value.

        Issues a full replace with the remaining values, since a merge cannot
        delete keys. Does nothing when ``name`` is not persisted.

        Returns:
            bool: True if a write was issued
        """
        if not self.is_persisted(name):
            logger.debug(f"Reset of '{name}' for {self.owner} skipped: not persisted")
            return False
        remaining = {key: value for key, value in self._values.items() if key != name}
        self.write(remaining, perform="replace")
        return True

    def write(self, values: Dict[str, bool], perform: str = "update") -> None:
        """
        Write ``values`` through the adapter and mirror them in the cache.

        Args:
            values: Flag values to write
            perform: ``"update"`` to merge or ``"replace"`` to overwrite an existing record;
                a missing record is always created
        """
        if perform not in ("update", "replace"):
            raise ValueError(f"Unknown write operation: {perform}")

        payload = dict(values)
        if not self.has_record():
            self.adapter.create(self.owner, payload)
            self._values = dict(payload)
            logger.debug(f"Created flag record for {self.owner}: {sorted(payload)}")
            return

        getattr(self.adapter, perform)(self.owner, payload)
        if perform == "replace":
            self._values = dict(payload)
        else:
            self._values.update(payload)
        logger.debug(f"Flag record for {self.owner} {perform}d: {sorted(payload)}")

    def reload(self) -> None:
        self._loaded = False
        self._values = None
        logger.debug(f"Flag record cache for {self.owner} dropped")
