from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .guards import current_claims


def register(app: Flask, container: Container) -> None:
    login_required = container.login_required

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        result = container.auth_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=data.get("role", ""),
            employee_id=data.get("employee_id", ""),
            department=data.get("department", ""),
        )
        app.logger.info("Registered %s (%s)", result.user.employee_id, result.user.role.value)
        return jsonify(result.to_dict()), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        result = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return jsonify(result.to_dict())

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        user = container.auth_service.get_user(current_claims().user_id)
        return jsonify(user.to_public_dict())

    @app.route("/api/users/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        return jsonify([u.to_public_dict() for u in container.user_service.list_employees()])
