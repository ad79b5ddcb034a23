"""
Main Features facade.

This module provides the per-owner ``Features`` object that coordinates
evaluation, persistence, transactions and serialization for one instance.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .attribute_access import IAttributeAccessor
from .evaluation_context import EvaluationContext, coerce
from .exceptions import PersistenceNotAttachedError, UnknownFlagError
from .persistence.adapter_interface import IFlagAdapter, OwnerIdentity, identity_for
from .persistence.persistence_cache import _OMITTED, PersistenceCache
from .persistence.transaction import Transaction
from .serializer import Serializer, serialize

logger = logging.getLogger(__name__)


class Features:
    """
    Flag facade bound to one owner.

    Check order: values forced with ``override_flags``, then persisted
    values (when an adapter is attached), then the override chain.
    The evaluation context and the persistence cache are created on first use.

    Args:
        scope: Scope whose resolved chains apply to the owner
        owner: Object computations run against
        adapter: Optional store for per-owner overrides
        identity: Owner identity for the adapter; derived from the owner when omitted
        accessor: Policy for reading owner attributes from computations
    """

    def __init__(
        self,
        scope,
        owner: Any = None,
        adapter: Optional[IFlagAdapter] = None,
        identity: Optional[OwnerIdentity] = None,
        accessor: Optional[IAttributeAccessor] = None,
    ) -> None:
        self._scope = scope
        self._owner = owner
        self._adapter = adapter
        self._identity = identity
        self._accessor = accessor
        self._context: Optional[EvaluationContext] = None
        self._cache: Optional[PersistenceCache] = None
        self._forced: Dict[str, bool] = {}

    @property
    def scope(self):
        return self._scope

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def context(self) -> EvaluationContext:
        if self._context is None:
            self._context = EvaluationContext(
                self._scope.registry, self._owner, accessor=self._accessor, checker=self.check
            )
        return self._context

    @property
    def identity(self) -> OwnerIdentity:
        if self._identity is None:
            self._identity = identity_for(self._owner)
        return self._identity

    @property
    def persistent(self) -> bool:
        return self._adapter is not None

    @property
    def cache(self) -> PersistenceCache:
        if self._adapter is None:
            raise PersistenceNotAttachedError(
                f"No persistence adapter attached to features of '{self._scope.name}'"
            )
        if self._cache is None:
            self._cache = PersistenceCache(self._adapter, self.identity, self.context)
        return self._cache

    # Checking
    def names(self) -> Tuple[str, ...]:
        return self._scope.registry.names()

    def requires_arguments(self, name: str) -> bool:
        return self.context.requires_arguments(name)

    def resolve(self, name: str, *args: Any) -> Any:
        """Raw value of the chain head for ``name``; ignores persisted and forced values."""
        return self.context.resolve(name, *args)

    def check(self, name: str, *args: Any) -> bool:
        """
        Check whether a flag is enabled for this owner.

        Args:
            name: Flag name
            *args: Positional arguments passed to the flag's computation

        Returns:
            bool: Always exactly True or False

        Raises:
            UnknownFlagError: If ``name`` is not declared for this owner's scope
        """
        if name in self._forced:
            return self._forced[name]
        if self._adapter is not None:
            return self.cache.check(name, *args)
        return self.context.check(name, *args)

    def __getattr__(self, name: str) -> Callable[..., bool]:
        if name.startswith("_"):
            raise AttributeError(name)
        scope = self.__dict__.get("_scope")
        if scope is None or name not in scope.registry:
            raise UnknownFlagError(name, scope.name if scope is not None else "")

        def check_flag(*args: Any) -> bool:
            return self.check(name, *args)

        check_flag.__name__ = name
        return check_flag

    def __contains__(self, name: object) -> bool:
        return name in self._scope.registry

    # Persistence
    def persisted_flags(self) -> Optional[Dict[str, bool]]:
        flags = self.cache.persisted_flags()
        return None if flags is None else dict(flags)

    def is_persisted(self, name: Optional[str] = None, value: Any = _OMITTED) -> bool:
        return self.cache.is_persisted(name, value)

    def persist(self, name: str, *args: Any) -> None:
        self.cache.persist(name, *args)

    def set(self, name: str, value: Any) -> None:
        self.cache.set(name, value)

    def enable(self, name: str) -> None:
        self.cache.enable(name)

    def disable(self, name: str) -> None:
        self.cache.disable(name)

    def reset(self, name: str) -> bool:
        return self.cache.reset(name)

    def reload(self) -> None:
        """Drop cached persisted values; the next check fetches them again."""
        if self._cache is not None:
            self._cache.reload()

    def transaction(self) -> Transaction:
        return Transaction(self.cache)

    # Serialization
    def serializer(self) -> Serializer:
        return Serializer(self)

    def serialize(
        self,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
        context: Optional[Dict[str, Iterable[Any]]] = None,
    ) -> Dict[str, bool]:
        return serialize(self, include=include, exclude=exclude, context=context)

    # Forced values, see flag_context_managers
    def get_forced(self, name: str) -> Optional[bool]:
        return self._forced.get(name)

    def force(self, name: str, value: Any) -> None:
        self._scope.registry.chain_for(name)
        self._forced[name] = coerce(value)

    def unforce(self, name: str) -> None:
        self._forced.pop(name, None)

    def log_current_flags(self) -> None:
        """Log every argument-free flag value for debugging."""
        names = [name for name in self.names() if not self.requires_arguments(name)]
        logger.info(f"Current flag state for {self._scope.name}:")
        for name in names:
            logger.info(f"  {name}: {self.check(name)}")

    def __repr__(self) -> str:
        return f"Features(scope={self._scope.name!r}, owner={self._owner!r})"
