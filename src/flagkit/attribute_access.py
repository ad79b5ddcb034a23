"""
Interface for reading an owner's state from inside flag computations.
Implements Dependency Inversion Principle for getattr functionality.
"""

from abc import ABC, abstractmethod
from typing import Any


class IAttributeAccessor(ABC):
    """
    Interface for abstracting attribute access on flag owners.

    Computations never touch the owner directly; every read goes through an
    accessor so the visible surface of the owner is a single, swappable policy.
    """

    @abstractmethod
    def get_attribute(self, obj: Any, attr_name: str) -> Any:
        """
        Get an attribute from an owner.

        Args:
            obj: Owner to read from
            attr_name: Name of the attribute to retrieve

        Returns:
            The attribute value

        Raises:
            AttributeError: If the attribute is missing or not exposed
        """
        pass


class PublicAttributeAccessor(IAttributeAccessor):
    """
    Exposes only the public surface of an owner.
    Names starting with an underscore are treated as private state.
    """

    def get_attribute(self, obj: Any, attr_name: str) -> Any:
        if attr_name.startswith("_"):
            raise AttributeError(
                f"'{type(obj).__name__}' attribute '{attr_name}' is private to flag computations"
            )
        return getattr(obj, attr_name)


class OwnerView:
    """Read-only view of an owner, as seen by flag computations."""

    __slots__ = ("_owner", "_accessor")

    def __init__(self, owner: Any, accessor: IAttributeAccessor) -> None:
        object.__setattr__(self, "_owner", owner)
        object.__setattr__(self, "_accessor", accessor)

    def __getattr__(self, attr_name: str) -> Any:
        return self._accessor.get_attribute(self._owner, attr_name)

    def __setattr__(self, attr_name: str, value: Any) -> None:
        raise AttributeError("Flag computations cannot modify their owner")

    def __repr__(self) -> str:
        return f"OwnerView({self._owner!r})"


def create_attribute_accessor() -> IAttributeAccessor:
    """Create default attribute accessor implementation."""
    return PublicAttributeAccessor()
