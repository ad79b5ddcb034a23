"""
Evaluation of override chains against one owning instance.

Every computation receives an ``Invocation`` as its first argument. The
invocation exposes the owner's public surface through ``owner`` and the
overridden implementation through ``proceed()``, so call-through is an
ordinary function call rather than language-level dispatch.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from .attribute_access import IAttributeAccessor, OwnerView, create_attribute_accessor
from .exceptions import ChainExhaustedError
from .flag_registry import FlagRegistry, OverrideChain

logger = logging.getLogger(__name__)


def coerce(value: Any) -> bool:
    """
    Coerce a computation result to a flag value.

    Only ``None`` and ``False`` are disabled; every other value, including
    ``0`` and empty containers, enables the flag.
    """
    return value is not None and value is not False


class Invocation:
    """One call of one chain link, bound to the owner being evaluated."""

    def __init__(self, context: "EvaluationContext", chain: OverrideChain, position: int) -> None:
        self._context = context
        self._chain = chain
        self._position = position

    @property
    def name(self) -> str:
        return self._chain.name

    @property
    def owner(self) -> OwnerView:
        return self._context.owner_view

    @property
    def has_next(self) -> bool:
        return self._position + 1 < len(self._chain)

    def proceed(self, *args: Any) -> Any:
        """Evaluate the overridden implementation with the same owner and return its raw value."""
        if not self.has_next:
            raise ChainExhaustedError(self.name)
        return self._context.invoke(self._chain, self._position + 1, args)

    def check(self, name: str, *args: Any) -> bool:
        """Check another flag of the same owner."""
        return self._context.checker(name, *args)


class EvaluationContext:
    """
    Resolves flags for one owner by walking their override chains.

    Args:
        registry: Registry holding the resolved chains of the owner's scope
        owner: Object computations run against
        accessor: Policy deciding which owner attributes computations may read
        checker: Callable used by ``Invocation.check``; defaults to ``self.check``
    """

    def __init__(
        self,
        registry: FlagRegistry,
        owner: Any = None,
        accessor: Optional[IAttributeAccessor] = None,
        checker: Optional[Callable[..., bool]] = None,
    ) -> None:
        self.registry = registry
        self.owner = owner
        self._accessor = accessor or create_attribute_accessor()
        self._owner_view: Optional[OwnerView] = None
        self.checker = checker or self.check

    @property
    def owner_view(self) -> OwnerView:
        if self._owner_view is None:
            self._owner_view = OwnerView(self.owner, self._accessor)
        return self._owner_view

    def requires_arguments(self, name: str) -> bool:
        """Whether the head implementation of ``name`` needs positional arguments."""
        return self.registry.chain_for(name).head.requires_arguments

    def invoke(self, chain: OverrideChain, position: int, args: Tuple[Any, ...]) -> Any:
        link = chain.links[position]
        return link.computation(Invocation(self, chain, position), *args)

    def resolve(self, name: str, *args: Any) -> Any:
        """Evaluate the chain head for ``name`` and return its raw value."""
        return self.invoke(self.registry.chain_for(name), 0, args)

    def check(self, name: str, *args: Any) -> bool:
        return coerce(self.resolve(name, *args))
