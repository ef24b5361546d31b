from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date, inclusive_day_span, parse_iso_date
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    """A time-off request.

    employee_name and department are copied from the requester at submission
    time and are not refreshed when the user record changes later.
    """

    id: str
    employee_id: str
    employee_name: str
    department: str
    type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    applied_on: date
    rejection_reason: Optional[str] = None

    @property
    def days(self) -> int:
        return inclusive_day_span(self.start_date, self.end_date)

    def to_record(self) -> dict:
        record = {
            "id": self.id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "department": self.department,
            "type": self.type.value,
            "startDate": format_iso_date(self.start_date),
            "endDate": format_iso_date(self.end_date),
            "reason": self.reason,
            "status": self.status.value,
            "appliedOn": format_iso_date(self.applied_on),
        }
        if self.rejection_reason is not None:
            record["rejectionReason"] = self.rejection_reason
        return record

    @classmethod
    def from_record(cls, row: dict) -> "LeaveRequest":
        return cls(
            id=str(row["id"]),
            employee_id=str(row["employeeId"]),
            employee_name=row.get("employeeName") or "",
            department=row.get("department") or "",
            type=LeaveType(row["type"]),
            start_date=parse_iso_date(row["startDate"]),
            end_date=parse_iso_date(row["endDate"]),
            reason=row.get("reason") or "",
            status=LeaveStatus(row.get("status", LeaveStatus.PENDING.value)),
            applied_on=parse_iso_date(row["appliedOn"]),
            rejection_reason=row.get("rejectionReason"),
        )
