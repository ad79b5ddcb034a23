"""
Adapter persisting flag records into a single JSON document.

The document is a flat object keyed by ``"kind:id"``; each value is the
owner's ``{flag name: bool}`` map. Every operation is a full read or a full
rewrite of the file, so the adapter is meant for small deployments and
local tooling rather than concurrent writers.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from .adapter_interface import IFlagAdapter, OwnerIdentity

logger = logging.getLogger(__name__)


class JsonFileAdapter(IFlagAdapter):
    """Stores every owner's flag map in one JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, Dict[str, bool]]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise ValueError(f"Flag document {self.path} must contain a JSON object")
        return document

    def _dump(self, document: Dict[str, Dict[str, bool]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def fetch(self, owner: OwnerIdentity) -> Optional[Dict[str, bool]]:
        values = self._load().get(str(owner))
        return None if values is None else dict(values)

    def create(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        document = self._load()
        document[str(owner)] = dict(values)
        self._dump(document)
        logger.debug(f"Created flag record {owner} in {self.path}")

    def update(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        document = self._load()
        document.setdefault(str(owner), {}).update(values)
        self._dump(document)
        logger.debug(f"Merged {sorted(values)} into flag record {owner}")

    def replace(self, owner: OwnerIdentity, values: Dict[str, bool]) -> None:
        document = self._load()
        document[str(owner)] = dict(values)
        self._dump(document)
        logger.debug(f"Replaced flag record {owner} with {sorted(values)}")
