from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role, UserStatus

# Persisted (camelCase) key -> attribute name
USER_FIELD_ALIASES = {"leaveBalance": "leave_balance"}


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object. Records handed out by services are copies; a
    session snapshot goes stale when the stored record changes.
    """

    id: str
    name: str
    email: str
    username: str
    role: Role
    department: str
    status: UserStatus = UserStatus.ACTIVE
    leave_balance: int = 0

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_employee(self) -> bool:
        return self.role == Role.EMPLOYEE

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "username": self.username,
            "role": self.role.value,
            "department": self.department,
            "status": self.status.value,
            "leaveBalance": self.leave_balance,
        }

    @classmethod
    def from_record(cls, row: dict) -> "User":
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            email=row.get("email") or "",
            username=row.get("username") or "",
            role=Role(row.get("role", Role.EMPLOYEE.value)),
            department=row.get("department") or "",
            status=UserStatus(row.get("status", UserStatus.ACTIVE.value)),
            leave_balance=int(row.get("leaveBalance", 0) or 0),
        )


def normalize_user_fields(fields: dict) -> dict:
    """Accept either attribute names or persisted keys for user fields."""
    return {USER_FIELD_ALIASES.get(key, key): value for key, value in (fields or {}).items()}
