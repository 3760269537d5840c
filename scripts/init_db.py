from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.database.bootstrap import apply_schema, list_tables
from src.attendance_tracker.attendance_tracker.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    if not getattr(settings, "DB_CONFIG", None):
        raise SystemExit("DB_CONFIG is not set for this environment (APP_ENV)")

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    apply_schema(conn)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {conn.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
