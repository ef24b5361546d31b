from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_LEAVE_BALANCE, RECENT_ACTIVITY_LIMIT
from ..core.enums import LeaveStatus, Role
from ..requests.model import LeaveRequest
from ..requests.repository import LeaveRequestRepository
from ..store.repository import TableStore
from ..users.model import User
from ..users.repository import UserRepository


@dataclass(frozen=True)
class AdminSummary:
    employee_count: int
    pending_count: int
    approved_count: int
    rejected_count: int
    recent_activity: list[LeaveRequest]

    def to_dict(self) -> dict:
        return {
            "employeeCount": self.employee_count,
            "pendingCount": self.pending_count,
            "approvedCount": self.approved_count,
            "rejectedCount": self.rejected_count,
            "recentActivity": [r.to_record() for r in self.recent_activity],
        }


@dataclass(frozen=True)
class EmployeeSummary:
    available_leave_days: int
    pending_count: int
    used_leave_days: int
    recent_leaves: list[LeaveRequest]

    def to_dict(self) -> dict:
        return {
            "availableLeaveDays": self.available_leave_days,
            "pendingCount": self.pending_count,
            "usedLeaveDays": self.used_leave_days,
            "recentLeaves": [r.to_record() for r in self.recent_leaves],
        }


class DashboardService:
    """Read-only dashboard figures folded over the user and request tables."""

    def __init__(self, store: TableStore, *, recent_limit: int = RECENT_ACTIVITY_LIMIT):
        self._store = store
        self._users = UserRepository(store)
        self._requests = LeaveRequestRepository(store)
        self._recent_limit = recent_limit

    def _snapshot(self) -> tuple[list[User], list[LeaveRequest]]:
        # One transaction so both tables come from the same point in time.
        with self._store.transaction():
            return self._users.list_all(), self._requests.list_all()

    def admin_summary(self) -> AdminSummary:
        users, requests = self._snapshot()
        return AdminSummary(
            employee_count=sum(1 for u in users if u.role == Role.EMPLOYEE),
            pending_count=_count(requests, LeaveStatus.PENDING),
            approved_count=_count(requests, LeaveStatus.APPROVED),
            rejected_count=_count(requests, LeaveStatus.REJECTED),
            recent_activity=requests[: self._recent_limit],
        )

    def employee_summary(self, employee_id: str) -> EmployeeSummary:
        users, requests = self._snapshot()
        user: Optional[User] = next((u for u in users if u.id == employee_id), None)
        mine = [r for r in requests if r.employee_id == employee_id]

        return EmployeeSummary(
            available_leave_days=user.leave_balance if user else DEFAULT_LEAVE_BALANCE,
            pending_count=_count(mine, LeaveStatus.PENDING),
            used_leave_days=_used_days(mine),
            recent_leaves=mine[: self._recent_limit],
        )

    def usage_by_employee(self) -> list[dict]:
        users, requests = self._snapshot()

        usage_map: dict[str, dict] = {}
        for u in users:
            if u.role != Role.EMPLOYEE:
                continue
            usage_map[u.id] = {
                "employee_id": u.id,
                "name": u.name,
                "department": u.department,
                "leave_balance": u.leave_balance,
                "used_days": 0,
                "pending_count": 0,
            }

        for r in requests:
            row = usage_map.get(r.employee_id)
            if not row:
                # requests of removed employees are orphaned, not reported
                continue
            if r.status == LeaveStatus.APPROVED:
                row["used_days"] += r.days
            elif r.status == LeaveStatus.PENDING:
                row["pending_count"] += 1

        rows = list(usage_map.values())
        rows.sort(key=lambda x: x["used_days"], reverse=True)
        return rows


def _count(requests: list[LeaveRequest], status: LeaveStatus) -> int:
    return sum(1 for r in requests if r.status == status)


def _used_days(requests: list[LeaveRequest]) -> int:
    return sum(r.days for r in requests if r.status == LeaveStatus.APPROVED)
