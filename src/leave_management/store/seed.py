"""Starter content written the first time a store is opened.

Each table is seeded only while it is absent. A table that exists is never
touched again, even when its neighbours are missing.
"""

from __future__ import annotations

import logging

from ..core.constants import CREDENTIALS_TABLE, LEAVE_REQUESTS_TABLE, USERS_TABLE
from .repository import TableStore

logger = logging.getLogger(__name__)

DEFAULT_ADMIN = {
    "id": "admin-1",
    "name": "Administrator",
    "email": "admin@esyleave.com",
    "username": "admin",
    "role": "admin",
    "department": "Administration",
    "status": "active",
    "leaveBalance": 0,
}

DEFAULT_EMPLOYEES = [
    {
        "id": "emp-1",
        "name": "John Smith",
        "email": "john.smith@example.com",
        "username": "john",
        "role": "employee",
        "department": "Engineering",
        "status": "active",
        "leaveBalance": 20,
    },
    {
        "id": "emp-2",
        "name": "Neha Sharma",
        "email": "neha@example.com",
        "username": "neha",
        "role": "employee",
        "department": "Marketing",
        "status": "active",
        "leaveBalance": 18,
    },
    {
        "id": "emp-3",
        "name": "Khushi Patel",
        "email": "khushi@example.com",
        "username": "khushi",
        "role": "employee",
        "department": "HR",
        "status": "active",
        "leaveBalance": 20,
    },
]

DEFAULT_LEAVE_REQUESTS = [
    {
        "id": "leave-1",
        "employeeId": "emp-3",
        "employeeName": "Khushi Patel",
        "department": "HR",
        "type": "sick",
        "startDate": "2025-04-16",
        "endDate": "2025-04-19",
        "reason": "Not feeling well",
        "status": "pending",
        "appliedOn": "2025-04-15",
    },
    {
        "id": "leave-2",
        "employeeId": "emp-2",
        "employeeName": "Neha Sharma",
        "department": "Marketing",
        "type": "personal",
        "startDate": "2025-04-16",
        "endDate": "2025-04-21",
        "reason": "Family function",
        "status": "pending",
        "appliedOn": "2025-04-14",
    },
    {
        "id": "leave-3",
        "employeeId": "emp-2",
        "employeeName": "Neha Sharma",
        "department": "Marketing",
        "type": "sick",
        "startDate": "2025-04-10",
        "endDate": "2025-04-12",
        "reason": "Medical checkup",
        "status": "approved",
        "appliedOn": "2025-04-08",
    },
]

DEFAULT_CREDENTIALS = {
    "admin": "1234",
    "john": "545454",
    "neha": "password",
    "khushi": "password",
}


def default_tables() -> dict:
    return {
        USERS_TABLE: [dict(DEFAULT_ADMIN)] + [dict(e) for e in DEFAULT_EMPLOYEES],
        LEAVE_REQUESTS_TABLE: [dict(r) for r in DEFAULT_LEAVE_REQUESTS],
        CREDENTIALS_TABLE: dict(DEFAULT_CREDENTIALS),
    }


def seed_tables(store: TableStore) -> list[str]:
    """Write every absent starter table. Returns the names that were seeded."""
    def _seed() -> list[str]:
        # Re-checked on every attempt: another process may have seeded first.
        written = []
        for name, records in default_tables().items():
            if store.has_table(name):
                continue
            store.write_table(name, records)
            written.append(name)
        return written

    seeded = store.atomic(_seed)

    if seeded:
        logger.info("Seeded store tables: %s", ", ".join(seeded))
    return seeded
