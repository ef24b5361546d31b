from __future__ import annotations

from typing import Any, Callable, ContextManager, Optional, Protocol, TypeVar

T = TypeVar("T")


class TableStore(Protocol):
    """Whole-table key/value store shared by every service.

    Services depend on this interface, never on a concrete backend. A table
    is any JSON-serializable value (a list of records or a mapping); there are
    no partial updates.
    """

    def read_table(self, name: str) -> Optional[Any]:
        """Return a private copy of the table, or None when it is absent."""

        raise NotImplementedError

    def write_table(self, name: str, records: Optional[Any]) -> None:
        """Replace the table wholesale. Writing None clears it."""

        raise NotImplementedError

    def has_table(self, name: str) -> bool:
        raise NotImplementedError

    def transaction(self) -> ContextManager["TableStore"]:
        """Stage writes and commit them together when the block exits cleanly."""

        raise NotImplementedError

    def atomic(self, fn: Callable[[], T], *, attempts: int = 3) -> T:
        """Run fn inside a transaction, retrying on stale table versions."""

        raise NotImplementedError
