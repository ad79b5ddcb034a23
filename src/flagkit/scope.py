"""
Scopes: named declaration units owning a flag registry.

    account_flags = Scope("AccountFlags")
    account_flags.declare("beta_dashboard", True)

    @account_flags.flag()
    def export_format(invocation, fmt):
        return fmt in invocation.owner.allowed_formats

Module scopes are reusable building blocks. They can be checked directly,
against their ``namespace`` object, and composed into other scopes.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .composition_resolver import CompositionLink, get_resolver
from .exceptions import FlagError
from .flag_registry import Computation, FlagDefinition, FlagRegistry, OverrideChain

logger = logging.getLogger(__name__)


class ScopeKind(Enum):
    """What a scope declares flags for."""

    MODULE = "module"
    INSTANCE = "instance"
    CLASS = "class"


class Scope:
    """
    A named declaration unit.

    Args:
        name: Human-readable scope name, used as the origin of its declarations
        kind: Kind of scope; defaults to ``ScopeKind.MODULE``
        namespace: Object module-scope computations read from when checked directly
    """

    def __init__(self, name: str, kind: Optional[ScopeKind] = None, namespace: Any = None) -> None:
        self.name = name
        self.kind = kind or ScopeKind.MODULE
        self.namespace = namespace
        self.registry = FlagRegistry(name)
        self.compositions: List[CompositionLink] = []
        self.parent: Optional[Scope] = None
        self._features = None

    def declare(
        self, name: str, default: Any = False, computation: Optional[Computation] = None
    ) -> FlagDefinition:
        definition = self.registry.declare(name, default, computation)
        logger.debug(f"Declared flag '{name}' on '{self.name}'")
        return definition

    def flag(self, name: Optional[str] = None) -> Callable[[Computation], Computation]:
        """Decorator declaring the decorated function as a flag computation."""

        def decorator(computation: Computation) -> Computation:
            self.declare(name or computation.__name__, computation=computation)
            return computation

        return decorator

    def compose(self, *sources: "Scope") -> "Scope":
        """Compose ``sources`` into this scope, in order, and return this scope."""
        resolver = get_resolver()
        for source in sources:
            self.compositions.append(resolver.compose(self, source))
        return self

    def specialize(
        self, name: str, kind: Optional[ScopeKind] = None, namespace: Any = None
    ) -> "Scope":
        """Return a new scope holding a snapshot of this scope's chains."""
        return get_resolver().specialize(self, name, kind=kind, namespace=namespace)

    def names(self) -> Tuple[str, ...]:
        return self.registry.names()

    def chain_for(self, name: str) -> OverrideChain:
        return self.registry.chain_for(name)

    def describe(self) -> Dict[str, Any]:
        """Inspectable summary of the resolved chains and compositions."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "parent": self.parent.name if self.parent else None,
            "compositions": [link.source for link in self.compositions],
            "flags": self.registry.describe(),
        }

    @property
    def features(self):
        """Facade checking this module scope's flags against its namespace."""
        if self.kind is not ScopeKind.MODULE:
            raise FlagError(
                f"'{self.name}' is a {self.kind.value} scope; check its flags through an instance"
            )
        if self._features is None:
            from .features import Features

            self._features = Features(self, owner=self.namespace)
        return self._features

    def check(self, name: str, *args: Any) -> bool:
        return self.features.check(name, *args)

    def __contains__(self, name: object) -> bool:
        return name in self.registry

    def __repr__(self) -> str:
        return f"Scope({self.name!r}, kind={self.kind.value}, flags={len(self.registry)})"
