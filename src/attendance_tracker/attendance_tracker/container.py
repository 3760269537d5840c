from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time
from typing import Callable, Optional

import mysql.connector

from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_CHECKIN_CUTOFF, DEFAULT_HALF_DAY_HOURS, DEFAULT_TOKEN_TTL_DAYS
from .database.bootstrap import apply_schema
from .database.connection import DatabaseConnection, DBConfig
from .reports.export import CsvExportService
from .reports.service import ReportService
from .users.guards import make_guards
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService

logger = logging.getLogger(__name__)

BACKEND_MYSQL = "mysql"
BACKEND_MEMORY = "memory"


@dataclass(frozen=True)
class Container:
    storage_backend: str
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    strategy_factory: AttendanceStrategyFactory

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    report_service: ReportService
    export_service: CsvExportService

    login_required: Callable
    manager_required: Callable


def _open_mysql(db_config: dict, *, auto_init_db: bool) -> DatabaseConnection:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    if auto_init_db:
        apply_schema(conn)
    conn.ping()
    return conn


def build_container(
    *,
    jwt_secret: str,
    storage_backend: str = BACKEND_MYSQL,
    db_config: dict | None = None,
    auto_init_db: bool = False,
    token_ttl_days: int = DEFAULT_TOKEN_TTL_DAYS,
    checkin_cutoff: time = DEFAULT_CHECKIN_CUTOFF,
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS,
) -> Container:
    """Build the store and services.

    This is the explicit ready point: it blocks until the store is usable. A
    MySQL store that cannot be reached degrades to the in-memory store with a
    warning; nothing written there survives a restart.
    """
    backend = (storage_backend or BACKEND_MYSQL).lower()
    if backend not in (BACKEND_MYSQL, BACKEND_MEMORY):
        raise ValueError(f"Unknown STORAGE_BACKEND: {storage_backend!r}")

    conn: Optional[DatabaseConnection] = None
    if backend == BACKEND_MYSQL:
        if not db_config:
            logger.warning("DB_CONFIG not set, falling back to in-memory storage. Data will not persist.")
            backend = BACKEND_MEMORY
        else:
            try:
                conn = _open_mysql(db_config, auto_init_db=auto_init_db)
                logger.info("Connected to MySQL %s", conn.describe())
            except mysql.connector.Error as e:
                logger.error("Failed to connect to MySQL: %s", e)
                logger.warning("Falling back to in-memory storage")
                conn = None
                backend = BACKEND_MEMORY

    if conn is not None:
        users_repo: UserRepository = MySQLUserRepository(conn)
        attendance_repo: AttendanceRepository = MySQLAttendanceRepository(conn)
    else:
        users_repo = InMemoryUserRepository()
        attendance_repo = InMemoryAttendanceRepository()

    strategy_factory = AttendanceStrategyFactory(checkin_cutoff=checkin_cutoff, half_day_hours=float(half_day_hours))
    token_service = TokenService(jwt_secret, ttl_days=token_ttl_days)
    auth_service = AuthService(users_repo, token_service)
    user_service = UserService(users_repo)
    attendance_service = AttendanceService(attendance_repo, users_repo, strategy_factory=strategy_factory)
    report_service = ReportService(attendance_repo, users_repo)
    export_service = CsvExportService(attendance_service)
    login_required, manager_required = make_guards(token_service)

    return Container(
        storage_backend=backend,
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        strategy_factory=strategy_factory,
        token_service=token_service,
        auth_service=auth_service,
        user_service=user_service,
        attendance_service=attendance_service,
        report_service=report_service,
        export_service=export_service,
        login_required=login_required,
        manager_required=manager_required,
    )
