"""
Host-class integration.

    shared = Scope("SharedFlags")
    shared.declare("search", True)

    class User(Flaggable, include=[shared]):
        feature_adapter = InMemoryAdapter()

        beta_dashboard = feature(True)

        @feature
        def export(invocation, fmt):
            return fmt in invocation.owner.allowed_formats

    User(id=1).features.check("export", "csv")

Every subclass owns an instance scope. It starts as a snapshot of the
first flaggable base's scope, followed by the chains of any further
flaggable bases in base order, then receives the ``include`` scopes, then
the ``feature`` declarations of the class body in order.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from .composition_resolver import get_resolver
from .features import Features
from .flag_registry import Computation, FlagDefinition
from .persistence.adapter_interface import IFlagAdapter, OwnerIdentity, identity_for
from .scope import Scope, ScopeKind

logger = logging.getLogger(__name__)


class FeatureDeclaration:
    """Class-body marker collected into the class's instance scope."""

    def __init__(self, default: Any = False, computation: Optional[Computation] = None) -> None:
        self.default = default
        self.computation = computation

    def __repr__(self) -> str:
        if self.computation is not None:
            return f"FeatureDeclaration(computation={self.computation.__name__})"
        return f"FeatureDeclaration(default={self.default!r})"


def feature(default_or_computation: Any = False) -> FeatureDeclaration:
    """
    Declare a flag in a ``Flaggable`` class body.

    Use ``feature(True)`` for a constant default, or as a decorator on a
    function ``(invocation, *args)`` computing the value.
    """
    if callable(default_or_computation):
        return FeatureDeclaration(computation=default_or_computation)
    return FeatureDeclaration(default=default_or_computation)


class Flaggable:
    """
    Mixin giving instances a ``features`` facade.

    Attributes:
        feature_adapter: Store for per-instance overrides; None disables persistence
    """

    feature_adapter: Optional[IFlagAdapter] = None

    def __init_subclass__(cls, include: Iterable[Scope] = (), **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        parents: List[Scope] = []
        for base in cls.__bases__:
            scope = getattr(base, "_feature_scope", None)
            if scope is not None and scope not in parents:
                parents.append(scope)

        resolver = get_resolver()
        cls._feature_scope = resolver.specialize(
            parents[0] if parents else None, cls.__qualname__, kind=ScopeKind.INSTANCE
        )
        for parent in parents[1:]:
            resolver.inherit(cls._feature_scope, parent)
        cls._class_feature_scope = Scope(f"{cls.__qualname__}.class", kind=ScopeKind.CLASS)
        cls._feature_scope.compose(*include)

        for attr_name, value in list(cls.__dict__.items()):
            if isinstance(value, FeatureDeclaration):
                cls._feature_scope.declare(attr_name, value.default, value.computation)
                delattr(cls, attr_name)

    @classmethod
    def feature_scope(cls) -> Scope:
        return cls._feature_scope

    @classmethod
    def declare_feature(
        cls, name: str, default: Any = False, computation: Optional[Computation] = None
    ) -> FlagDefinition:
        return cls._feature_scope.declare(name, default, computation)

    @classmethod
    def include_features(cls, *scopes: Scope) -> None:
        """Compose module scopes into the instance scope of this class."""
        cls._feature_scope.compose(*scopes)

    @classmethod
    def extend_features(cls, *scopes: Scope) -> None:
        """Compose module scopes into the class-level surface; always rejected."""
        cls._class_feature_scope.compose(*scopes)

    @property
    def features(self) -> Features:
        features = self.__dict__.get("_features")
        if features is None:
            adapter = self.feature_adapter
            identity = self.feature_identity() if adapter is not None else None
            features = Features(
                type(self)._feature_scope, owner=self, adapter=adapter, identity=identity
            )
            self.__dict__["_features"] = features
        return features

    def feature_identity(self) -> OwnerIdentity:
        """Identity of this instance's persisted record; defaults to (class name, id)."""
        return identity_for(self)

    def reload_features(self) -> None:
        features = self.__dict__.get("_features")
        if features is not None:
            features.reload()
