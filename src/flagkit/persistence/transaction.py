"""
Batched persistence of several flag values in one adapter call.

    with user.features.transaction() as tx:
        tx.enable("beta_dashboard")
        tx.disable("legacy_export")

On commit the pending values become the owner's whole record: an existing
record is replaced, so persisted flags left out of the transaction are
dropped and fall back to their computed values.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..evaluation_context import coerce
from .persistence_cache import PersistenceCache

logger = logging.getLogger(__name__)


class Transaction:
    """
    Accumulates flag mutations and commits them as a single write.

    Attributes:
        values: Pending name -> bool mutations, in first-mutation order
    """

    def __init__(self, cache: PersistenceCache) -> None:
        self._cache = cache
        self.values: Dict[str, bool] = {}
        self.committed = False

    def persist(self, name: str, *args: Any) -> None:
        """Compute the chain value for ``name`` now and stage it."""
        self.values[name] = self._cache.context.check(name, *args)

    def set(self, name: str, value: Any) -> None:
        self._cache.context.registry.chain_for(name)
        self.values[name] = coerce(value)

    def enable(self, name: str) -> None:
        self.set(name, True)

    def disable(self, name: str) -> None:
        self.set(name, False)

    def reset(self, name: str) -> None:
        """Unstage ``name``; already persisted storage is left alone until commit."""
        self.values.pop(name, None)

    def commit(self) -> Dict[str, bool]:
        """
        Issue exactly one adapter call: create when no record exists, replace otherwise.

        Returns:
            Dict[str, bool]: The values written
        """
        if self.committed:
            raise RuntimeError("Transaction already committed")
        self._cache.write(self.values, perform="replace")
        self.committed = True
        logger.info(f"Committed {len(self.values)} flag values for {self._cache.owner}")
        return dict(self.values)

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.commit()
        else:
            logger.debug(f"Transaction for {self._cache.owner} discarded after {exc_type.__name__}")
        return False
