from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Optional, Tuple

from .base import BaseTableStore


class InMemoryTableStore(BaseTableStore):
    """Process-local store. Used by tests and the `memory` backend."""

    def __init__(self, tables: Optional[Mapping[str, Any]] = None, *, seed: bool = True):
        super().__init__(seed=seed)
        self._tables: Dict[str, Any] = copy.deepcopy(dict(tables or {}))

    def _load(self, name: str) -> Tuple[Optional[Any], Optional[int]]:
        return self._tables.get(name), None

    def _commit(self, tables: Dict[str, Any], expected_versions: Dict[str, Optional[int]]) -> None:
        for name, records in tables.items():
            if records is None:
                self._tables.pop(name, None)
            else:
                self._tables[name] = records

    def snapshot(self) -> Dict[str, Any]:
        """Raw copy of every table, without triggering seeding."""
        with self._lock:
            return copy.deepcopy(self._tables)
