"""
Context managers for temporarily forcing flag values.

Forced values live on one ``Features`` object only. They win over persisted
and computed values, are never written to an adapter, and are restored when
the block exits, including when it raises.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Generator, Optional

from .features import Features

logger = logging.getLogger(__name__)


class FlagContextManagers:
    """
    Provides context managers for temporarily modifying flag values.

    Used by tests and by callers that need a deterministic flag state for a
    short-lived operation without touching persisted records.
    """

    @classmethod
    @contextmanager
    def override_flags(
        cls, features: Features, flag_overrides: Dict[str, bool]
    ) -> Generator[Features, None, None]:
        """
        Generic context manager to override multiple flags.

        Args:
            features: Facade whose values are forced
            flag_overrides: Dictionary of flag names and their temporary values

        Yields:
            The same ``features`` object
        """
        original_values: Dict[str, Optional[bool]] = {}

        try:
            for flag_name, value in flag_overrides.items():
                original_values[flag_name] = features.get_forced(flag_name)
                features.force(flag_name, value)

            logger.debug(f"Flags overridden via context manager: {flag_overrides}")
            yield features

        finally:
            for flag_name, original in original_values.items():
                if original is not None:
                    features.force(flag_name, original)
                else:
                    features.unforce(flag_name)

            logger.debug("Flag override context manager restored")

    @classmethod
    @contextmanager
    def disable_all(cls, features: Features) -> Generator[Features, None, None]:
        """Force every flag of ``features`` off."""
        with cls.override_flags(features, {name: False for name in features.names()}):
            yield features

    @classmethod
    @contextmanager
    def enable_all(cls, features: Features) -> Generator[Features, None, None]:
        """Force every flag of ``features`` on."""
        with cls.override_flags(features, {name: True for name in features.names()}):
            yield features


override_flags = FlagContextManagers.override_flags
