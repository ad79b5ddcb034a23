"""
Flag definitions, override chains and the per-scope registry.

A registry maps every flag name to an immutable override chain. The chain
head is the most recently declared implementation; every later link is the
implementation it overrides, reachable through ``proceed()`` at evaluation
time. Chains are tuples, so copying a registry yields a snapshot that later
declarations on the original can never reach.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .exceptions import UnknownFlagError

logger = logging.getLogger(__name__)

Computation = Callable[..., Any]


def _constant(value: Any) -> Computation:
    def default_value(invocation):
        return value

    return default_value


def count_required_arguments(computation: Computation) -> int:
    """
    Count the positional arguments a computation needs besides the invocation.

    Args:
        computation: Callable taking the invocation as its first argument

    Returns:
        Number of required positional parameters after the invocation

    Raises:
        TypeError: If the callable cannot receive the invocation argument
    """
    try:
        signature = inspect.signature(computation)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures are treated as argument-free
        return 0

    positional = [
        p
        for p in signature.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    has_var_positional = any(
        p.kind is inspect.Parameter.VAR_POSITIONAL for p in signature.parameters.values()
    )
    if not positional and not has_var_positional:
        raise TypeError(
            f"Flag computation {computation!r} must accept the invocation as its first argument"
        )

    required = [p for p in positional if p.default is inspect.Parameter.empty]
    return max(len(required) - 1, 0)


@dataclass(frozen=True)
class FlagDefinition:
    """A single implementation of a flag, as declared on one scope."""

    name: str
    computation: Computation
    origin: str = ""
    static: bool = True
    required_arguments: int = 0

    @classmethod
    def build(
        cls,
        name: str,
        default: Any = False,
        computation: Optional[Computation] = None,
        origin: str = "",
    ) -> "FlagDefinition":
        if computation is None:
            if callable(default):
                raise TypeError(
                    f"Default for flag '{name}' is callable; pass it as computation= instead"
                )
            return cls(name=name, computation=_constant(default), origin=origin, static=True)
        if not callable(computation):
            raise TypeError(f"Computation for flag '{name}' must be callable")
        return cls(
            name=name,
            computation=computation,
            origin=origin,
            static=False,
            required_arguments=count_required_arguments(computation),
        )

    @property
    def requires_arguments(self) -> bool:
        return self.required_arguments > 0


@dataclass(frozen=True)
class OverrideChain:
    """Ordered implementations of one flag name, most recent first."""

    name: str
    links: Tuple[FlagDefinition, ...] = field(default_factory=tuple)

    @property
    def head(self) -> FlagDefinition:
        return self.links[0]

    def push(self, definition: FlagDefinition) -> "OverrideChain":
        """Return a new chain with ``definition`` as its head."""
        return OverrideChain(self.name, (definition,) + self.links)

    def extend(self, other: "OverrideChain") -> "OverrideChain":
        """
        Return a new chain with ``other``'s links appended in their current order.

        Links we already hold that ``other`` also carries are moved to their
        position in ``other``, so re-extending with a chain that gained a new
        head puts that head ahead of the links it overrides.
        """
        kept = tuple(link for link in self.links if link not in other.links)
        return OverrideChain(self.name, kept + other.links)

    def origins(self) -> List[str]:
        return [link.origin for link in self.links]

    def __len__(self) -> int:
        return len(self.links)

    def __iter__(self) -> Iterator[FlagDefinition]:
        return iter(self.links)


class FlagRegistry:
    """
    Per-scope store of flag definitions and their override chains.

    Names keep their first-declaration order; re-declaring a name pushes a
    new chain head without moving the name or discarding older links.
    """

    def __init__(self, scope_name: str = "") -> None:
        self.scope_name = scope_name
        self._chains: Dict[str, OverrideChain] = {}

    def declare(
        self,
        name: str,
        default: Any = False,
        computation: Optional[Computation] = None,
    ) -> FlagDefinition:
        """
        Declare a flag, or override an existing declaration of the same name.

        Args:
            name: Flag name, unique as a lookup key within this registry
            default: Constant value used when no computation is given
            computation: Callable ``(invocation, *args)`` producing the value

        Returns:
            The new chain head
        """
        if not name or not isinstance(name, str):
            raise ValueError("Flag name must be a non-empty string")
        if computation is not None and default is not False:
            raise ValueError(f"Flag '{name}' takes either a default or a computation, not both")

        definition = FlagDefinition.build(name, default, computation, origin=self.scope_name)
        existing = self._chains.get(name)
        if existing is None:
            self._chains[name] = OverrideChain(name, (definition,))
        else:
            self._chains[name] = existing.push(definition)
            logger.debug(
                f"Flag '{name}' overridden on '{self.scope_name}' (chain length {len(existing) + 1})"
            )
        return definition

    def chain_for(self, name: str) -> OverrideChain:
        try:
            return self._chains[name]
        except KeyError:
            raise UnknownFlagError(name, self.scope_name) from None

    def append_chain(self, name: str, chain: OverrideChain) -> None:
        """Append ``chain`` after the chain this registry owns for ``name``."""
        existing = self._chains.get(name)
        if existing is None:
            self._chains[name] = OverrideChain(name, chain.links)
        else:
            self._chains[name] = existing.extend(chain)

    def names(self) -> Tuple[str, ...]:
        return tuple(self._chains)

    def copy(self, scope_name: Optional[str] = None) -> "FlagRegistry":
        clone = FlagRegistry(self.scope_name if scope_name is None else scope_name)
        clone._chains = dict(self._chains)
        return clone

    def describe(self) -> Dict[str, List[str]]:
        """Map each flag name to the origins of its chain links, head first."""
        return {name: chain.origins() for name, chain in self._chains.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._chains

    def __len__(self) -> int:
        return len(self._chains)
