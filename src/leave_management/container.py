from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .reports.service import DashboardService
from .requests.service import LeaveRequestService
from .store.json_file_store import JsonFileTableStore
from .store.memory_store import InMemoryTableStore
from .store.mysql_table_store import MySQLTableStore
from .store.repository import TableStore
from .users.credentials import build_credential_policy
from .users.service import EmployeeDirectoryService, IdentityService


@dataclass(frozen=True)
class Container:
    store: TableStore

    identity_service: IdentityService
    directory_service: EmployeeDirectoryService
    leave_service: LeaveRequestService
    dashboard_service: DashboardService


def build_store(
    *,
    backend: str = "memory",
    store_path: Optional[str] = None,
    db_config: Optional[dict] = None,
    seed: bool = True,
) -> TableStore:
    backend = (backend or "memory").strip().lower()
    if backend == "memory":
        return InMemoryTableStore(seed=seed)
    if backend == "json":
        if not store_path:
            raise ValueError("STORE_PATH is required for the json store backend")
        return JsonFileTableStore(store_path, seed=seed)
    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql store backend")
        store = MySQLTableStore(DatabaseConnection(DBConfig.from_dict(db_config)), seed=seed)
        store.ensure_schema()
        return store
    raise ValueError(f"Unknown store backend: {backend!r}")


def build_container(*, store: TableStore, credential_policy: str = "plaintext") -> Container:
    credentials = build_credential_policy(credential_policy)

    return Container(
        store=store,
        identity_service=IdentityService(store, credentials=credentials),
        directory_service=EmployeeDirectoryService(store, credentials=credentials),
        leave_service=LeaveRequestService(store),
        dashboard_service=DashboardService(store),
    )
