"""
Common test strategies for Hypothesis-based property testing.

This package provides reusable strategies for property-based testing with Hypothesis.
These strategies generate flag names, declarations and persisted records
for testing scopes, evaluation and persistence.
"""

from .flag_strategies import (
    computation_results,
    flag_declarations,
    flag_names,
    persisted_records,
)

__all__ = [
    "computation_results",
    "flag_declarations",
    "flag_names",
    "persisted_records",
]
