from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, TypeVar

from ..core.constants import DEFAULT_COMMIT_ATTEMPTS
from ..core.exceptions import StaleTableError
from .seed import seed_tables

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseTableStore:
    """Shared transaction and seeding logic for the concrete stores.

    Subclasses implement `_load` and `_commit`. All access goes through one
    re-entrant lock, so a transaction is the single writer for its duration.
    Writes inside a transaction are staged and handed to `_commit` in one call.
    """

    def __init__(self, *, seed: bool = True):
        self._lock = threading.RLock()
        self._seed = seed
        self._initialized = False
        self._staged: Optional[Dict[str, Any]] = None
        self._read_versions: Dict[str, Optional[int]] = {}

    # Backend hooks
    def _load(self, name: str) -> Tuple[Optional[Any], Optional[int]]:
        """Return (table, version). Version is None when the backend does not track it."""

        raise NotImplementedError

    def _commit(self, tables: Dict[str, Any], expected_versions: Dict[str, Optional[int]]) -> None:
        """Persist all tables at once.

        Names present in expected_versions must still be at that version,
        otherwise StaleTableError is raised and nothing is written.
        """

        raise NotImplementedError

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        self._initialized = True
        if not self._seed:
            return
        try:
            seed_tables(self)
        except Exception:
            self._initialized = False
            raise

    def _remember_version(self, name: str, version: Optional[int]) -> None:
        if self._staged is not None and name not in self._read_versions:
            self._read_versions[name] = version

    def read_table(self, name: str) -> Optional[Any]:
        with self._lock:
            self._ensure_initialized()
            if self._staged is not None and name in self._staged:
                return copy.deepcopy(self._staged[name])
            table, version = self._load(name)
            self._remember_version(name, version)
            return copy.deepcopy(table)

    def write_table(self, name: str, records: Optional[Any]) -> None:
        with self._lock:
            self._ensure_initialized()
            payload = copy.deepcopy(records)
            if self._staged is None:
                self._commit({name: payload}, {})
                return
            if name not in self._read_versions:
                _, version = self._load(name)
                self._remember_version(name, version)
            self._staged[name] = payload

    def has_table(self, name: str) -> bool:
        return self.read_table(name) is not None

    @contextmanager
    def transaction(self) -> Iterator["BaseTableStore"]:
        with self._lock:
            if self._staged is not None:
                # Nested blocks join the outer transaction.
                yield self
                return

            self._ensure_initialized()
            self._staged = {}
            self._read_versions = {}
            try:
                yield self
                if self._staged:
                    expected = {n: self._read_versions[n] for n in self._staged if n in self._read_versions}
                    self._commit(dict(self._staged), expected)
            finally:
                self._staged = None
                self._read_versions = {}

    def atomic(self, fn: Callable[[], T], *, attempts: int = DEFAULT_COMMIT_ATTEMPTS) -> T:
        for attempt in range(1, attempts + 1):
            try:
                with self.transaction():
                    return fn()
            except StaleTableError:
                if attempt >= attempts:
                    raise
                logger.warning("Stale table on commit, retrying (attempt %s of %s)", attempt + 1, attempts)
        raise StaleTableError("No commit attempts were made")
