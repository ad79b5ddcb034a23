"""
Interface for stores that persist per-owner flag values.

An adapter keeps one record per owner identity: a flat map of flag name to
boolean. The core only ever issues the four operations below and never
retries or times them out; failures propagate to the caller unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, NamedTuple, Optional

from ..exceptions import FlagError


class OwnerIdentity(NamedTuple):
    """Stable key pair identifying the owner of a persisted record."""

    kind: str
    id: Any

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}"


def identity_for(owner: Any) -> OwnerIdentity:
    """
    Derive the default identity of an owner from its type and ``id`` attribute.

    Raises:
        FlagError: If the owner has no ``id`` attribute
    """
    owner_id = getattr(owner, "id", None)
    if owner_id is None:
        raise FlagError(
            f"Cannot derive an identity for {type(owner).__name__}: "
            "it has no 'id'; override feature_identity() or pass identity="
        )
    return OwnerIdentity(type(owner).__qualname__, owner_id)


class IFlagAdapter(ABC):
    """Contract a backing store implements to persist flag values."""

    @abstractmethod
    def fetch(self, owner: OwnerIdentity) -> Optional[Dict[str, bool]]:
        """
        Get the persisted values of an owner.

        Args:
            owner: Identity of the owner

        Returns:
            The persisted map, or None if nothing was ever persisted
        """
        pass

    @abstractmethod
    def create(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        """Create the initial record of an owner."""
        pass

    @abstractmethod
    def update(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        """Merge ``values`` into the existing record; keys not present are left untouched."""
        pass

    @abstractmethod
    def replace(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        """Overwrite the existing record with ``values``."""
        pass
