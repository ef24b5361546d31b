from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Optional

from ..common.validators import require_enum, require_non_empty, require_non_negative_int
from ..core.constants import DEFAULT_LEAVE_BALANCE
from ..core.enums import Role, UserStatus
from ..core.exceptions import ValidationError
from ..store.repository import TableStore
from .credentials import CredentialPolicy, PlaintextCredentials
from .model import User, normalize_user_fields
from .repository import CredentialRepository, SessionRepository, UserRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"name", "email", "department", "status", "leave_balance"}
IMMUTABLE_FIELDS = {"role", "username"}


class IdentityService:
    """Use case: authenticate a user and keep the session snapshot."""

    def __init__(self, store: TableStore, *, credentials: Optional[CredentialPolicy] = None):
        self._users = UserRepository(store)
        self._secrets = CredentialRepository(store)
        self._session = SessionRepository(store)
        self._policy = credentials or PlaintextCredentials()

    def login(self, username: str, password: str) -> Optional[User]:
        """Return the matching user, or None. A failed attempt leaves the session alone."""
        user = self._users.get_by_username(username or "")
        if not user or not self._policy.verify(self._secrets.get_secret(user.username), password or ""):
            logger.warning("Failed login for username %r", username)
            return None

        self._session.set(user)
        logger.info("User %s logged in", user.id)
        return user

    def logout(self) -> None:
        self._session.clear()

    def current_user(self) -> Optional[User]:
        return self._session.get()


class EmployeeDirectoryService:
    """Use case: manage employee records (admin)."""

    def __init__(self, store: TableStore, *, credentials: Optional[CredentialPolicy] = None):
        self._store = store
        self._users = UserRepository(store)
        self._secrets = CredentialRepository(store)
        self._policy = credentials or PlaintextCredentials()

    def list_employees(self) -> list[User]:
        return [u for u in self._users.list_all() if u.role == Role.EMPLOYEE]

    def search_employees(self, query: str = "") -> list[User]:
        needle = (query or "").strip().lower()
        employees = self.list_employees()
        if not needle:
            return employees
        return [
            u
            for u in employees
            if needle in u.name.lower() or needle in u.email.lower() or needle in u.department.lower()
        ]

    def get_employee(self, user_id: str) -> Optional[User]:
        user = self._users.get_by_id(user_id)
        return user if user and user.role == Role.EMPLOYEE else None

    def add_employee(self, fields: dict, password: str) -> User:
        fields = normalize_user_fields(fields)
        name = require_non_empty(fields.get("name"), "Name")
        username = require_non_empty(fields.get("username"), "Username")
        password = require_non_empty(password, "Password")
        status = require_enum(fields.get("status") or UserStatus.ACTIVE.value, UserStatus, "Status")

        # id, role and leave balance are always assigned here, never taken from the caller.
        user = User(
            id=f"emp-{uuid.uuid4().hex}",
            name=name,
            email=(fields.get("email") or "").strip(),
            username=username,
            role=Role.EMPLOYEE,
            department=(fields.get("department") or "").strip(),
            status=status,
            leave_balance=DEFAULT_LEAVE_BALANCE,
        )

        def _create() -> User:
            if self._users.get_by_username(username):
                raise ValidationError("Username already exists")
            self._users.append(user)
            self._secrets.set_secret(username, self._policy.encode(password))
            return user

        created = self._store.atomic(_create)
        logger.info("Employee %s (%s) added", created.id, created.username)
        return created

    def update_employee(self, user_id: str, fields: dict) -> Optional[User]:
        fields = normalize_user_fields(fields)
        fields.pop("id", None)

        def _update() -> Optional[User]:
            user = self._users.get_by_id(user_id)
            if not user:
                return None

            current = {"role": user.role.value, "username": user.username}
            for key in IMMUTABLE_FIELDS & fields.keys():
                value = getattr(fields[key], "value", fields[key])
                if value != current[key]:
                    raise ValidationError(f"{key} cannot be changed")

            unknown = fields.keys() - EDITABLE_FIELDS - IMMUTABLE_FIELDS
            if unknown:
                raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

            changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
            if "name" in changes:
                changes["name"] = require_non_empty(changes["name"], "Name")
            if "status" in changes:
                changes["status"] = require_enum(changes["status"], UserStatus, "Status")
            if "leave_balance" in changes:
                changes["leave_balance"] = require_non_negative_int(changes["leave_balance"], "Leave balance")
            for key in ("email", "department"):
                if key in changes:
                    changes[key] = (changes[key] or "").strip()

            updated = replace(user, **changes)
            self._users.update(updated)
            return updated

        updated = self._store.atomic(_update)
        if updated:
            logger.info("User %s updated (%s)", user_id, ", ".join(sorted(fields)) or "no fields")
        return updated

    def remove_employee(self, user_id: str) -> bool:
        """Hard delete. Credentials and leave requests of the user stay behind."""
        removed = self._store.atomic(lambda: self._users.delete_by_id(user_id))
        if removed:
            logger.info("User %s removed", user_id)
        return removed
