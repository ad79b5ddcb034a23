"""
Building module scopes from a YAML declaration document.

    scopes:
      SharedFlags:
        flags:
          search: true
          legacy_export: false
      AccountFlags:
        compose: [SharedFlags]
        flags:
          beta_dashboard: true

Only constant defaults can be declared this way; computed flags are
declared in code. Scopes are built in document order, so a scope can only
compose scopes defined above it.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from .exceptions import ConfigurationError
from .scope import Scope, ScopeKind

logger = logging.getLogger(__name__)

_ALLOWED_KEYS = {"kind", "flags", "compose"}


def _read_document(source: Union[str, Path, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source

    path = Path(source)
    if not path.exists():
        raise ConfigurationError(f"Declaration file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    return document or {}


def _build_scope(name: str, body: Any, built: Dict[str, Scope]) -> Scope:
    if body is None:
        body = {}
    if not isinstance(body, Mapping):
        raise ConfigurationError(f"Scope '{name}' must be a mapping")

    unknown = set(body) - _ALLOWED_KEYS
    if unknown:
        raise ConfigurationError(f"Scope '{name}' has unknown keys: {sorted(unknown)}")

    kind_name = body.get("kind", ScopeKind.MODULE.value)
    if kind_name != ScopeKind.MODULE.value:
        raise ConfigurationError(
            f"Scope '{name}' has kind '{kind_name}'; only module scopes can be declared in files"
        )

    scope = Scope(name)
    for source_name in body.get("compose") or []:
        if source_name not in built:
            raise ConfigurationError(
                f"Scope '{name}' composes '{source_name}', which is not defined above it"
            )
        scope.compose(built[source_name])

    flags = body.get("flags") or {}
    if not isinstance(flags, Mapping):
        raise ConfigurationError(f"Flags of scope '{name}' must be a mapping")
    for flag_name, default in flags.items():
        if not isinstance(default, bool):
            raise ConfigurationError(
                f"Flag '{flag_name}' of scope '{name}' must default to true or false, got {default!r}"
            )
        scope.declare(str(flag_name), default)

    return scope


def load_declarations(source: Union[str, Path, Mapping[str, Any]]) -> Dict[str, Scope]:
    """
    Build module scopes from a YAML file or an already parsed mapping.

    Args:
        source: Path to a YAML file, or a mapping with the same structure

    Returns:
        Dict[str, Scope]: Scopes by name, in document order

    Raises:
        ConfigurationError: If the document is malformed
    """
    document = _read_document(source)
    if not isinstance(document, Mapping):
        raise ConfigurationError("Declaration document must be a mapping")

    scope_entries = document.get("scopes") or {}
    if not isinstance(scope_entries, Mapping):
        raise ConfigurationError("'scopes' must be a mapping of scope names")

    built: Dict[str, Scope] = {}
    for name, body in scope_entries.items():
        built[str(name)] = _build_scope(str(name), body, built)

    logger.debug(f"Loaded {len(built)} flag scopes: {list(built)}")
    return built
