"""
Dictionary-backed adapter, used for tests and single-process setups.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .adapter_interface import IFlagAdapter, OwnerIdentity

logger = logging.getLogger(__name__)


class InMemoryAdapter(IFlagAdapter):
    """
    Keeps records in a dict and remembers every call it receives.

    Attributes:
        records: Persisted maps keyed by owner identity
        calls: ``(operation, owner, values)`` tuples in call order
    """

    def __init__(self, records: Optional[Dict[OwnerIdentity, Dict[str, bool]]] = None) -> None:
        self.records: Dict[OwnerIdentity, Dict[str, bool]] = {
            owner: dict(values) for owner, values in (records or {}).items()
        }
        self.calls: List[Tuple[str, OwnerIdentity, Any]] = []

    def fetch(self, owner: OwnerIdentity) -> Optional[Dict[str, bool]]:
        self.calls.append(("fetch", owner, None))
        values = self.records.get(owner)
        return None if values is None else dict(values)

    def create(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        self.calls.append(("create", owner, dict(values)))
        self.records[owner] = dict(values)

    def update(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        self.calls.append(("update", owner, dict(values)))
        self.records.setdefault(owner, {}).update(values)

    def replace(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        self.calls.append(("replace", owner, dict(values)))
        self.records[owner] = dict(values)

    def writes(self) -> List[Tuple[str, OwnerIdentity, Any]]:
        """Calls that modified a record, in order."""
        return [call for call in self.calls if call[0] != "fetch"]

    def clear(self) -> None:
        self.records.clear()
        self.calls.clear()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("In-memory flag records cleared")
