"""Single-file JSON store.

All tables live in one JSON document keyed by table name. Every commit
rewrites the whole document through a temp file + os.replace(...), so a
multi-table commit is either fully visible or not at all.

The re-entrant lock only covers one process; run a single writer process
against a given file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ..core.exceptions import StoreError
from .base import BaseTableStore


class JsonFileTableStore(BaseTableStore):
    def __init__(self, path: Union[str, Path], *, seed: bool = True):
        super().__init__(seed=seed)
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> Dict[str, Any]:
        try:
            with self._path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            raise StoreError(f"Store file {self._path} is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise StoreError(f"Store file {self._path} must contain a JSON object")
        return document

    def _atomic_write(self, document: Dict[str, Any]) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(directory), prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp, self._path)
        finally:
            if os.path.exists(tmp):
                os.remove(tmp)

    def _load(self, name: str) -> Tuple[Optional[Any], Optional[int]]:
        return self._read_document().get(name), None

    def _commit(self, tables: Dict[str, Any], expected_versions: Dict[str, Optional[int]]) -> None:
        document = self._read_document()
        for name, records in tables.items():
            if records is None:
                document.pop(name, None)
            else:
                document[name] = records
        self._atomic_write(document)
