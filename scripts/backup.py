"""Backup the store.

Dumps every known table of the configured store into a timestamped JSON
file under backups/.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from leave_management.container import build_store
from leave_management.core.constants import CREDENTIALS_TABLE, LEAVE_REQUESTS_TABLE, USERS_TABLE


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        backend=settings.STORE_BACKEND,
        store_path=settings.STORE_PATH,
        db_config=dict(settings.DB_CONFIG),
        seed=False,
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"leave_store_{ts}.json"

    with store.transaction():
        document = {name: store.read_table(name) for name in (USERS_TABLE, LEAVE_REQUESTS_TABLE, CREDENTIALS_TABLE)}

    with out_file.open("w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
