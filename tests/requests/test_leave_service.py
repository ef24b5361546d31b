from __future__ import annotations

import threading
from datetime import date

import pytest

from leave_management.core.constants import LEAVE_REQUESTS_TABLE, USERS_TABLE
from leave_management.core.enums import LeaveStatus, LeaveType
from leave_management.core.exceptions import IllegalTransitionError, ValidationError
from leave_management.requests.service import LeaveRequestService
from leave_management.store.memory_store import InMemoryTableStore
from leave_management.users.repository import UserRepository
from leave_management.users.service import EmployeeDirectoryService

TODAY = date(2025, 4, 20)


@pytest.fixture()
def store():
    return InMemoryTableStore()


@pytest.fixture()
def svc(store):
    return LeaveRequestService(store, clock=lambda: TODAY)


def _balance(store, user_id):
    return UserRepository(store).get_by_id(user_id).leave_balance


def _submit(svc, start, end, *, employee_id="emp-1", leave_type="annual"):
    return svc.submit(
        employee_id=employee_id,
        employee_name="John Smith",
        department="Engineering",
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        reason="Trip",
    )


def test_submit_puts_new_pending_request_first(svc):
    created = _submit(svc, "2025-05-01", "2025-05-02")

    listed = svc.list_all()
    assert listed[0] == created
    assert created.status == LeaveStatus.PENDING
    assert created.applied_on == TODAY
    assert created.type == LeaveType.ANNUAL
    assert created.rejection_reason is None
    assert [r.id for r in listed[1:]] == ["leave-1", "leave-2", "leave-3"]


def test_submit_accepts_date_objects(svc):
    created = _submit(svc, date(2025, 5, 1), date(2025, 5, 1))
    assert created.start_date == created.end_date == date(2025, 5, 1)


def test_submit_rejects_end_before_start(store, svc):
    before = store.read_table(LEAVE_REQUESTS_TABLE)

    with pytest.raises(ValidationError):
        _submit(svc, "2025-05-02", "2025-05-01")

    assert store.read_table(LEAVE_REQUESTS_TABLE) == before


@pytest.mark.parametrize(
    "overrides",
    [
        {"leave_type": "vacation"},
        {"start_date": ""},
        {"end_date": "05/02/2025"},
        {"employee_id": ""},
        {"employee_name": " "},
    ],
)
def test_submit_validates_fields(svc, overrides):
    kwargs = dict(
        employee_id="emp-1",
        employee_name="John Smith",
        department="Engineering",
        leave_type="sick",
        start_date="2025-05-01",
        end_date="2025-05-02",
    )
    kwargs.update(overrides)

    with pytest.raises(ValidationError):
        svc.submit(**kwargs)


def test_submitted_request_keeps_snapshot_of_requester(store, svc):
    created = _submit(svc, "2025-05-01", "2025-05-01")
    EmployeeDirectoryService(store).update_employee("emp-1", {"name": "Renamed", "department": "Ops"})

    stored = svc.get(created.id)
    assert stored.employee_name == "John Smith"
    assert stored.department == "Engineering"


def test_day_count_is_inclusive(svc):
    assert _submit(svc, "2025-04-16", "2025-04-16").days == 1
    assert _submit(svc, "2025-04-16", "2025-04-19").days == 4
    assert _submit(svc, "2025-02-27", "2025-03-02").days == 4


def test_approving_deducts_inclusive_days(store, svc):
    request = _submit(svc, "2025-04-16", "2025-04-19")

    approved = svc.set_status(request.id, "approved")

    assert approved.status == LeaveStatus.APPROVED
    assert _balance(store, "emp-1") == 16


def test_balance_never_goes_negative(store, svc):
    request = _submit(svc, "2025-05-01", "2025-05-25")
    assert request.days == 25

    svc.approve(request.id)

    assert _balance(store, "emp-1") == 0


def test_approve_then_reject_is_an_illegal_transition(store, svc):
    request = _submit(svc, "2025-04-16", "2025-04-19")
    svc.approve(request.id)

    with pytest.raises(IllegalTransitionError):
        svc.set_status(request.id, LeaveStatus.REJECTED, "Too late")

    assert svc.get(request.id).status == LeaveStatus.APPROVED
    assert svc.get(request.id).rejection_reason is None
    assert _balance(store, "emp-1") == 16


def test_approving_twice_does_not_deduct_twice(store, svc):
    request = _submit(svc, "2025-04-16", "2025-04-19")
    svc.approve(request.id)

    with pytest.raises(IllegalTransitionError):
        svc.approve(request.id)

    assert _balance(store, "emp-1") == 16


def test_rejected_request_is_terminal(svc):
    svc.reject("leave-1", "Short staffed")

    with pytest.raises(IllegalTransitionError):
        svc.approve("leave-1")


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_reject_requires_reason(svc, reason):
    with pytest.raises(ValidationError):
        svc.set_status("leave-1", "rejected", reason)

    assert svc.get("leave-1").status == LeaveStatus.PENDING


def test_reject_records_reason_and_keeps_balance(store, svc):
    rejected = svc.reject("leave-1", "Short staffed")

    assert rejected.status == LeaveStatus.REJECTED
    assert rejected.rejection_reason == "Short staffed"
    assert store.read_table(LEAVE_REQUESTS_TABLE)[0]["rejectionReason"] == "Short staffed"
    assert _balance(store, "emp-3") == 20


def test_approval_does_not_record_rejection_reason(svc):
    approved = svc.set_status("leave-1", "approved", "ignored")
    assert approved.rejection_reason is None


def test_unknown_request_returns_none_without_side_effects(store, svc):
    store.read_table(USERS_TABLE)
    before = store.snapshot()

    assert svc.set_status("leave-404", "approved") is None
    assert store.snapshot() == before


def test_unknown_request_without_rejection_reason_returns_none(store, svc):
    store.read_table(USERS_TABLE)
    before = store.snapshot()

    assert svc.set_status("leave-404", "rejected", None) is None
    assert store.snapshot() == before


def test_pending_is_not_a_decision(svc):
    with pytest.raises(ValidationError):
        svc.set_status("leave-1", "pending")
    with pytest.raises(ValidationError):
        svc.set_status("leave-1", "cancelled")


def test_approving_request_of_removed_employee_keeps_users(store, svc):
    EmployeeDirectoryService(store).remove_employee("emp-3")
    users_before = store.read_table(USERS_TABLE)

    approved = svc.approve("leave-1")

    assert approved.status == LeaveStatus.APPROVED
    assert store.read_table(USERS_TABLE) == users_before


def test_failed_balance_write_rolls_back_status(store, svc, monkeypatch):
    def _boom(self, user):
        raise RuntimeError("disk full")

    monkeypatch.setattr(UserRepository, "update", _boom)

    with pytest.raises(RuntimeError):
        svc.approve("leave-1")

    assert svc.get("leave-1").status == LeaveStatus.PENDING


def test_list_for_employee_preserves_order_and_filters(svc):
    newest = _submit(svc, "2025-06-01", "2025-06-02", employee_id="emp-2")

    mine = svc.list_for_employee("emp-2")
    assert [r.id for r in mine] == [newest.id, "leave-2", "leave-3"]
    assert [r.id for r in svc.list_for_employee("emp-2", status="approved")] == ["leave-3"]
    assert svc.list_for_employee("emp-404") == []


def test_list_all_filters_by_status(svc):
    assert [r.id for r in svc.list_all(status=LeaveStatus.PENDING)] == ["leave-1", "leave-2"]
    assert svc.list_all(status="rejected") == []
    with pytest.raises(ValidationError):
        svc.list_all(status="unknown")


def test_concurrent_approvals_deduct_every_request(store, svc):
    requests = [_submit(svc, "2025-05-01", "2025-05-01") for _ in range(10)]

    threads = [threading.Thread(target=svc.approve, args=(r.id,)) for r in requests]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert _balance(store, "emp-1") == 10
    assert all(svc.get(r.id).status == LeaveStatus.APPROVED for r in requests)
