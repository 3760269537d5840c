from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import filters_from_args, month_arg, optional_date_arg
from ..container import Container
from ..users.guards import current_claims


def register(app: Flask, container: Container) -> None:
    login_required = container.login_required
    manager_required = container.manager_required

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        record = container.attendance_service.check_in(current_claims().user_id)
        app.logger.info("Check-in %s on %s: %s", record.user_id, record.work_date, record.status.value)
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        record = container.attendance_service.check_out(current_claims().user_id)
        app.logger.info(
            "Check-out %s on %s: %s (%.1fh)", record.user_id, record.work_date, record.status.value, record.total_hours
        )
        return jsonify(record.to_dict())

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        record = container.attendance_service.get_today_record(current_claims().user_id)
        return jsonify(record.to_dict() if record else None)

    @app.route("/api/attendance/my-history", methods=["GET"], endpoint="my_history")
    @login_required
    def my_history():
        records = container.attendance_service.get_history(current_claims().user_id, month=month_arg())
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/my-summary", methods=["GET"], endpoint="my_summary")
    @login_required
    def my_summary():
        summary = container.report_service.monthly_summary(current_claims().user_id, month=month_arg())
        return jsonify(summary.to_dict())

    @app.route("/api/attendance/all", methods=["GET"], endpoint="all_attendance")
    @manager_required
    def all_attendance():
        rows = container.attendance_service.list_all_with_users(filters_from_args())
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/attendance/employee/<ref>", methods=["GET"], endpoint="employee_attendance")
    @manager_required
    def employee_attendance(ref: str):
        records = container.attendance_service.get_employee_history(ref, month=month_arg())
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="org_summary")
    @manager_required
    def org_summary():
        return jsonify(container.report_service.org_summary(month=month_arg()).to_dict())

    @app.route("/api/attendance/today-status", methods=["GET"], endpoint="today_status")
    @manager_required
    def today_status():
        return jsonify(container.report_service.daily_status(optional_date_arg("date")).to_dict())

    @app.route("/api/attendance/export", methods=["GET"], endpoint="export_csv")
    @manager_required
    def export_csv():
        csv_text = container.export_service.export(filters_from_args())
        return app.response_class(
            csv_text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{container.export_service.filename()}"'},
        )
