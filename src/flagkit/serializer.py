"""
Snapshot export of flag values as a name -> bool mapping.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .exceptions import MissingContextError

logger = logging.getLogger(__name__)


class Serializer:
    """
    Builds a filtered snapshot of every flag an owner can check.

    Flags are visited in declaration order. A non-empty include-list keeps
    only the listed names; the exclude-list then drops names even if they
    were included. Flags whose computation needs arguments must be given
    them through ``context``.

    Args:
        features: The ``Features`` facade to read values from
    """

    def __init__(self, features) -> None:
        self._features = features
        self._included: List[str] = []
        self._excluded: List[str] = []
        self._context: Dict[str, Tuple[Any, ...]] = {}

    def include(self, *names: str) -> "Serializer":
        self._included.extend(names)
        return self

    def exclude(self, *names: str) -> "Serializer":
        self._excluded.extend(names)
        return self

    def context(self, name: str, *args: Any) -> "Serializer":
        """Supply the positional arguments used when checking ``name``."""
        self._context[name] = args
        return self

    def is_serializable(self, name: str) -> bool:
        if self._included and name not in self._included:
            return False
        return name not in self._excluded

    def to_dict(self) -> Dict[str, bool]:
        serialized: Dict[str, bool] = {}
        for name in self._features.names():
            if not self.is_serializable(name):
                continue
            args = self._context.get(name, ())
            if not args and self._features.requires_arguments(name):
                raise MissingContextError(name)
            serialized[name] = self._features.check(name, *args)
        return serialized


def serialize(
    features,
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
    context: Optional[Dict[str, Iterable[Any]]] = None,
) -> Dict[str, bool]:
    """
    Serialize the flags of ``features`` in one call.

    Args:
        features: The ``Features`` facade to read values from
        include: Names to keep; empty or None keeps everything
        exclude: Names to drop
        context: Positional arguments per flag name

    Returns:
        Dict[str, bool]: Flag values in declaration order
    """
    serializer = Serializer(features)
    serializer.include(*(include or ()))
    serializer.exclude(*(exclude or ()))
    for name, args in (context or {}).items():
        serializer.context(name, *args)
    return serializer.to_dict()
