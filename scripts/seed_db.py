from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from leave_management.container import build_store
from leave_management.store.seed import seed_tables


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    store = build_store(
        backend=settings.STORE_BACKEND,
        store_path=settings.STORE_PATH,
        db_config=dict(settings.DB_CONFIG),
        seed=False,
    )
    seeded = seed_tables(store)
    print(f"OK: Seeded {settings.STORE_BACKEND} store (tables={', '.join(seeded) or 'none, already present'})")


if __name__ == "__main__":
    main()
