from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_time_of_day
from .common.http import register_error_handlers
from .container import build_container
from .core.constants import DEFAULT_CHECKIN_CUTOFF, DEFAULT_HALF_DAY_HOURS, DEFAULT_TOKEN_TTL_DAYS
from .database.seed import seed_demo_data
from .reports.controller import register as register_reports
from .users.controller import register as register_users


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    log_level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(log_level)

    cutoff = getattr(settings, "CHECKIN_CUTOFF", None)
    container = build_container(
        jwt_secret=getattr(settings, "JWT_SECRET", None) or app.secret_key,
        storage_backend=getattr(settings, "STORAGE_BACKEND", "mysql"),
        db_config=getattr(settings, "DB_CONFIG", None),
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        token_ttl_days=int(getattr(settings, "TOKEN_TTL_DAYS", DEFAULT_TOKEN_TTL_DAYS)),
        checkin_cutoff=parse_time_of_day(cutoff) if cutoff else DEFAULT_CHECKIN_CUTOFF,
        half_day_hours=float(getattr(settings, "HALF_DAY_HOURS", DEFAULT_HALF_DAY_HOURS)),
    )
    app.logger.info("[attendance-tracker] settings=%s storage=%s", settings_module, container.storage_backend)

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_demo_data(
            auth=container.auth_service,
            users=container.users_repo,
            attendance=container.attendance_repo,
            factory=container.strategy_factory,
        )

    app.extensions["attendance_tracker"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
