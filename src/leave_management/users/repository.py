from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import CREDENTIALS_TABLE, SESSION_TABLE, USERS_TABLE
from ..store.repository import TableStore
from .model import User


class UserRepository:
    """User table access. Every call re-reads the authoritative table."""

    def __init__(self, store: TableStore):
        self._store = store

    def list_all(self) -> list[User]:
        rows = self._store.read_table(USERS_TABLE) or []
        return [User.from_record(r) for r in rows]

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.list_all() if u.id == user_id), None)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.list_all() if u.username == username), None)

    def replace_all(self, users: Sequence[User]) -> None:
        self._store.write_table(USERS_TABLE, [u.to_record() for u in users])

    def append(self, user: User) -> None:
        users = self.list_all()
        users.append(user)
        self.replace_all(users)

    def update(self, user: User) -> bool:
        users = self.list_all()
        for i, existing in enumerate(users):
            if existing.id == user.id:
                users[i] = user
                self.replace_all(users)
                return True
        return False

    def delete_by_id(self, user_id: str) -> bool:
        users = self.list_all()
        kept = [u for u in users if u.id != user_id]
        if len(kept) == len(users):
            return False
        self.replace_all(kept)
        return True


class CredentialRepository:
    """username -> stored secret side table."""

    def __init__(self, store: TableStore):
        self._store = store

    def get_secret(self, username: str) -> Optional[str]:
        credentials = self._store.read_table(CREDENTIALS_TABLE) or {}
        return credentials.get(username)

    def set_secret(self, username: str, secret: str) -> None:
        credentials = self._store.read_table(CREDENTIALS_TABLE) or {}
        credentials[username] = secret
        self._store.write_table(CREDENTIALS_TABLE, credentials)


class SessionRepository:
    """The persisted "currently logged in" user snapshot."""

    def __init__(self, store: TableStore):
        self._store = store

    def get(self) -> Optional[User]:
        row = self._store.read_table(SESSION_TABLE)
        return User.from_record(row) if row else None

    def set(self, user: User) -> None:
        self._store.write_table(SESSION_TABLE, user.to_record())

    def clear(self) -> None:
        self._store.write_table(SESSION_TABLE, None)
