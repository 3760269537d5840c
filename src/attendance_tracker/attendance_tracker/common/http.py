from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..attendance.model import AttendanceFilters
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, ValidationError
from .datetime_utils import parse_iso_date
from .validators import require_choice


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to JSON responses with a stable message."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"message": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return jsonify({"message": f"Internal error: {e}"}), 500
        return jsonify({"message": "Internal server error"}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON or Content-Type not set to application/json")
    return data


def _arg(name: str) -> str | None:
    value = (request.args.get(name) or "").strip()
    return value or None


def optional_date_arg(name: str):
    value = _arg(name)
    return parse_iso_date(value) if value else None


def month_arg() -> str | None:
    return _arg("month")


def filters_from_args(*, user_id: str | None = None) -> AttendanceFilters:
    """Build filters from the query string. 'all' means no filter for employee/status."""
    employee = user_id or _arg("employee_id")
    status = _arg("status")
    return AttendanceFilters(
        user_id=employee if employee and employee != "all" else None,
        work_date=optional_date_arg("date"),
        status=require_choice(status, AttendanceStatus, "Status") if status and status != "all" else None,
        date_from=optional_date_arg("from"),
        date_to=optional_date_arg("to"),
    )
