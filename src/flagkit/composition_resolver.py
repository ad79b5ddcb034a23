"""
Composition of one scope's flags into another.

Composing copies the source's current chains into the target, after any
chain the target already owns for the same name. The target's own
implementation therefore stays the head and can ``proceed()`` into the
source's. Composition never reaches back into the source, and flags the
source declares later are not seen by the target unless it composes again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .exceptions import InvalidCompositionError

if TYPE_CHECKING:
    from .scope import Scope, ScopeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompositionLink:
    """Record of one ``source -> target`` composition."""

    source: str
    target: str
    names: Tuple[str, ...]


class CompositionResolver:
    """
    Merges registries when scopes compose.

    Module scopes may be composed into module or instance scopes. The
    class-level surface of a host class accepts no compositions: hosts
    receive flags through their instance scope. Instance scopes are never
    composition sources; they are specialized instead.
    """

    def compose(self, target: "Scope", source: "Scope") -> CompositionLink:
        """
        Append every chain of ``source`` after ``target``'s chain of the same name.

        Args:
            target: Scope receiving the flags
            source: Scope providing the flags

        Returns:
            CompositionLink: What was composed

        Raises:
            InvalidCompositionError: If either scope kind cannot take part
        """
        from .scope import ScopeKind

        if target.kind is ScopeKind.CLASS:
            raise InvalidCompositionError(
                f"Cannot compose '{source.name}' into the class-level scope '{target.name}'; "
                "compose into its instance scope instead"
            )
        if source.kind is not ScopeKind.MODULE:
            raise InvalidCompositionError(
                f"Only module scopes can be composed; '{source.name}' is a {source.kind.value} scope"
            )
        if source is target:
            raise InvalidCompositionError(f"Scope '{target.name}' cannot be composed into itself")

        names = source.registry.names()
        for name in names:
            target.registry.append_chain(name, source.registry.chain_for(name))

        link = CompositionLink(source.name, target.name, names)
        logger.debug(f"Composed {len(names)} flags from '{source.name}' into '{target.name}'")
        return link

    def specialize(
        self,
        parent: Optional["Scope"],
        name: str,
        kind: Optional["ScopeKind"] = None,
        namespace: object = None,
    ) -> "Scope":
        """
        Create a scope starting from a snapshot of ``parent``'s current chains.

        The snapshot is taken once; later declarations on the parent are not
        visible to the specialized scope.
        """
        from .scope import Scope

        if parent is None:
            return Scope(name, kind=kind, namespace=namespace)

        child = Scope(name, kind=kind or parent.kind, namespace=namespace)
        child.registry = parent.registry.copy(scope_name=name)
        child.compositions = list(parent.compositions)
        child.parent = parent
        logger.debug(f"Specialized '{parent.name}' as '{name}' with {len(child.registry)} flags")
        return child

    def inherit(self, target: "Scope", parent: "Scope") -> CompositionLink:
        """
        Append a further parent's current chains after ``target``'s.

        Used when a scope specializes more than one parent. Unlike ``compose``,
        any scope kind can be inherited from; links the target already holds
        through an earlier parent keep a single position.
        """
        if parent is target:
            raise InvalidCompositionError(f"Scope '{target.name}' cannot inherit from itself")

        names = parent.registry.names()
        for name in names:
            target.registry.append_chain(name, parent.registry.chain_for(name))

        link = CompositionLink(parent.name, target.name, names)
        target.compositions.extend(
            inherited for inherited in parent.compositions if inherited not in target.compositions
        )
        logger.debug(f"'{target.name}' inherited {len(names)} flags from '{parent.name}'")
        return link


_default_resolver = CompositionResolver()


def get_resolver() -> CompositionResolver:
    return _default_resolver
