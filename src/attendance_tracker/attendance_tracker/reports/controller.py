from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..users.guards import current_claims


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="employee_dashboard")
    @container.login_required
    def employee_dashboard():
        return jsonify(container.report_service.employee_dashboard(current_claims().user_id).to_dict())

    @app.route("/api/dashboard/manager", methods=["GET"], endpoint="manager_dashboard")
    @container.manager_required
    def manager_dashboard():
        return jsonify(container.report_service.manager_dashboard().to_dict())
