from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.common.datetime_utils import parse_time_of_day
from src.attendance_tracker.attendance_tracker.container import BACKEND_MYSQL, build_container
from src.attendance_tracker.attendance_tracker.database.seed import seed_demo_data


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        jwt_secret=getattr(settings, "JWT_SECRET", None) or settings.SECRET_KEY,
        storage_backend=BACKEND_MYSQL,
        db_config=getattr(settings, "DB_CONFIG", None),
        auto_init_db=True,
        checkin_cutoff=parse_time_of_day(getattr(settings, "CHECKIN_CUTOFF", "09:15:00")),
        half_day_hours=float(getattr(settings, "HALF_DAY_HOURS", 4.0)),
    )
    if container.conn is None:
        raise SystemExit("MySQL is not reachable; nothing to seed")

    seeded = seed_demo_data(
        auth=container.auth_service,
        users=container.users_repo,
        attendance=container.attendance_repo,
        factory=container.strategy_factory,
    )
    print(f"OK: {'Seeded' if seeded else 'Already seeded'} -> {container.conn.describe()}")


if __name__ == "__main__":
    main()
