from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import LEAVE_REQUESTS_TABLE
from ..store.repository import TableStore
from .model import LeaveRequest


class LeaveRequestRepository:
    """Leave request table access. Store order is newest first."""

    def __init__(self, store: TableStore):
        self._store = store

    def list_all(self) -> list[LeaveRequest]:
        rows = self._store.read_table(LEAVE_REQUESTS_TABLE) or []
        return [LeaveRequest.from_record(r) for r in rows]

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        return next((r for r in self.list_all() if r.id == request_id), None)

    def replace_all(self, requests: Sequence[LeaveRequest]) -> None:
        self._store.write_table(LEAVE_REQUESTS_TABLE, [r.to_record() for r in requests])

    def prepend(self, request: LeaveRequest) -> None:
        self.replace_all([request] + self.list_all())

    def update(self, request: LeaveRequest) -> bool:
        requests = self.list_all()
        for i, existing in enumerate(requests):
            if existing.id == request.id:
                requests[i] = request
                self.replace_all(requests)
                return True
        return False
