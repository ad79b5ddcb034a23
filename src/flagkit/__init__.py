"""
Composable, persistable boolean flags.

This package provides a flag system with separated concerns:
- FlagRegistry: per-scope definitions and override chains
- CompositionResolver: merging one scope's chains into another
- EvaluationContext: evaluating chains against an owning instance
- PersistenceCache / Transaction: per-instance overrides behind an adapter
- Serializer: filtered name -> bool snapshots
- Features: per-owner facade coordinating all components
"""

from .exceptions import (
    ChainExhaustedError,
    ConfigurationError,
    FlagError,
    InvalidCompositionError,
    MissingContextError,
    PersistenceNotAttachedError,
    UnknownFlagError,
)
from .flag_registry import FlagDefinition, FlagRegistry, OverrideChain
from .composition_resolver import CompositionLink, CompositionResolver
from .evaluation_context import EvaluationContext, Invocation, coerce
from .scope import Scope, ScopeKind
from .features import Features
from .flaggable import Flaggable, feature
from .serializer import Serializer
from .flag_context_managers import FlagContextManagers, override_flags
from .config_loader import load_declarations
from .persistence import (
    IFlagAdapter,
    InMemoryAdapter,
    JsonFileAdapter,
    OwnerIdentity,
    PersistenceCache,
    Transaction,
)

__all__ = [
    "ChainExhaustedError",
    "ConfigurationError",
    "FlagError",
    "InvalidCompositionError",
    "MissingContextError",
    "PersistenceNotAttachedError",
    "UnknownFlagError",
    "FlagDefinition",
    "FlagRegistry",
    "OverrideChain",
    "CompositionLink",
    "CompositionResolver",
    "EvaluationContext",
    "Invocation",
    "coerce",
    "Scope",
    "ScopeKind",
    "Features",
    "Flaggable",
    "feature",
    "Serializer",
    "FlagContextManagers",
    "override_flags",
    "load_declarations",
    "IFlagAdapter",
    "InMemoryAdapter",
    "JsonFileAdapter",
    "OwnerIdentity",
    "PersistenceCache",
    "Transaction",
]
