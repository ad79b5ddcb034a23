"""
Custom exceptions for flag declaration, composition and evaluation.
"""


class FlagError(Exception):
    """Base class for all flagkit errors."""
    pass


class UnknownFlagError(FlagError, AttributeError):
    """Raised when a flag name was never declared in the resolved chain."""

    def __init__(self, name: str, scope_name: str = ""):
        where = f" on scope '{scope_name}'" if scope_name else ""
        super().__init__(f"Unknown flag '{name}'{where}")
        self.name = name
        self.scope_name = scope_name


class InvalidCompositionError(FlagError):
    """Raised when flags are composed onto a scope kind that rejects composition."""
    pass


class MissingContextError(FlagError):
    """Raised when serializing a flag that needs arguments nobody supplied."""

    def __init__(self, name: str):
        super().__init__(
            f"Flag '{name}' requires arguments; supply them with context('{name}', ...)"
        )
        self.name = name


class ChainExhaustedError(FlagError):
    """Raised when proceed() is called from the last link of an override chain."""

    def __init__(self, name: str):
        super().__init__(f"Flag '{name}' has no overridden implementation to proceed to")
        self.name = name


class ConfigurationError(FlagError):
    """Raised when a declaration document cannot be turned into scopes."""
    pass


class PersistenceNotAttachedError(FlagError):
    """Raised when a persistence operation is used on features without an adapter."""
    pass
