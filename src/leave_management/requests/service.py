from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Callable, Optional, Union

from ..common.datetime_utils import coerce_date, today_local
from ..common.validators import require_enum, require_non_empty
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import IllegalTransitionError, ValidationError
from ..store.repository import TableStore
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


class LeaveRequestService:
    """Leave request lifecycle: submit, list, approve/reject, balance deduction.

    pending -> approved and pending -> rejected are the only transitions.
    Deciding a request that already left pending raises IllegalTransitionError.
    """

    def __init__(self, store: TableStore, *, clock: Callable[[], date] = today_local):
        self._store = store
        self._requests = LeaveRequestRepository(store)
        self._users = UserRepository(store)
        self._clock = clock

    def submit(
        self,
        *,
        employee_id: str,
        employee_name: str,
        department: str,
        leave_type: Union[LeaveType, str],
        start_date: DateLike,
        end_date: DateLike,
        reason: str = "",
    ) -> LeaveRequest:
        employee_id = require_non_empty(employee_id, "Employee")
        employee_name = require_non_empty(employee_name, "Employee name")
        leave_type = require_enum(leave_type, LeaveType, "Leave type")
        start = coerce_date(start_date, "Start date")
        end = coerce_date(end_date, "End date")
        if end < start:
            raise ValidationError("End date cannot be before start date")

        request = LeaveRequest(
            id=f"leave-{uuid.uuid4().hex}",
            employee_id=employee_id,
            employee_name=employee_name,
            department=(department or "").strip(),
            type=leave_type,
            start_date=start,
            end_date=end,
            reason=(reason or "").strip(),
            status=LeaveStatus.PENDING,
            applied_on=self._clock(),
        )
        self._store.atomic(lambda: self._requests.prepend(request))
        logger.info("Leave request %s submitted by %s (%s days)", request.id, employee_id, request.days)
        return request

    def list_all(self, *, status: Optional[Union[LeaveStatus, str]] = None) -> list[LeaveRequest]:
        requests = self._requests.list_all()
        if status is None:
            return requests
        wanted = require_enum(status, LeaveStatus, "Status")
        return [r for r in requests if r.status == wanted]

    def list_for_employee(
        self, employee_id: str, *, status: Optional[Union[LeaveStatus, str]] = None
    ) -> list[LeaveRequest]:
        return [r for r in self.list_all(status=status) if r.employee_id == employee_id]

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        return self._requests.get_by_id(request_id)

    def set_status(
        self,
        request_id: str,
        new_status: Union[LeaveStatus, str],
        rejection_reason: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        """Decide a pending request. Returns None when the id is unknown.

        Approval deducts the inclusive day span from the employee's balance,
        floored at zero, in the same store transaction as the status change.
        """
        status = require_enum(new_status, LeaveStatus, "Status")
        if status == LeaveStatus.PENDING:
            raise ValidationError("Status must be approved or rejected")

        def _decide() -> Optional[LeaveRequest]:
            request = self._requests.get_by_id(request_id)
            if not request:
                return None
            reason = None
            if status == LeaveStatus.REJECTED:
                reason = require_non_empty(rejection_reason, "Rejection reason")
            if request.status.is_terminal:
                raise IllegalTransitionError(f"Leave request {request_id} is already {request.status.value}")

            decided = replace(request, status=status, rejection_reason=reason)
            self._requests.update(decided)
            if status == LeaveStatus.APPROVED:
                self._deduct_balance(decided)
            return decided

        decided = self._store.atomic(_decide)
        if decided:
            logger.info("Leave request %s %s", request_id, status.value)
        return decided

    def approve(self, request_id: str) -> Optional[LeaveRequest]:
        return self.set_status(request_id, LeaveStatus.APPROVED)

    def reject(self, request_id: str, reason: str) -> Optional[LeaveRequest]:
        return self.set_status(request_id, LeaveStatus.REJECTED, reason)

    def _deduct_balance(self, request: LeaveRequest) -> None:
        user = self._users.get_by_id(request.employee_id)
        if not user:
            logger.warning("Approved leave %s for missing employee %s; balance unchanged", request.id, request.employee_id)
            return
        self._users.update(replace(user, leave_balance=max(0, user.leave_balance - request.days)))
