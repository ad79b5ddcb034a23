"""
Tabular reports of flag values across many owners.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .exceptions import FlagError
from .features import Features

logger = logging.getLogger(__name__)


def _row_label(features: Features, position: int) -> str:
    try:
        return str(features.identity)
    except FlagError:
        return f"#{position}"


def flag_matrix(
    features_list: Iterable[Features],
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
    context: Optional[Dict[str, Iterable[Any]]] = None,
) -> pd.DataFrame:
    """
    Serialize each owner's flags into one boolean DataFrame.

    Args:
        features_list: Facades to serialize, one row each
        include: Names to keep; empty or None keeps everything
        exclude: Names to drop
        context: Positional arguments per flag name, shared by every row

    Returns:
        pd.DataFrame: Rows indexed by owner identity, one column per flag.
            Flags an owner does not have are False.
    """
    include = list(include or [])
    exclude = list(exclude or [])
    rows: List[Dict[str, bool]] = []
    labels: List[str] = []
    columns: List[str] = []

    for position, features in enumerate(features_list):
        serialized = features.serialize(include=include, exclude=exclude, context=context)
        rows.append(serialized)
        labels.append(_row_label(features, position))
        for name in serialized:
            if name not in columns:
                columns.append(name)

    frame = pd.DataFrame(rows, index=pd.Index(labels, name="owner"), columns=columns)
    frame = frame.astype("boolean").fillna(False).astype(bool)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Built flag matrix with {len(frame)} owners and {len(columns)} flags")
    return frame


def summarize_flag_matrix(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Per-flag enabled counts and ratios of a ``flag_matrix`` result.

    Returns:
        pd.DataFrame: Indexed by flag name with ``enabled``, ``total`` and ``ratio`` columns
    """
    total = len(frame)
    enabled = frame.sum(axis=0).astype(int)
    summary = pd.DataFrame(
        {
            "enabled": enabled,
            "total": total,
            "ratio": enabled / total if total else 0.0,
        }
    )
    summary.index.name = "flag"
    return summary
