from __future__ import annotations

from flask import Flask, g, jsonify

from ..container import Container
from ..users.guards import admin_required, ensure_self_or_admin, login_required


def register(app: Flask, container: Container) -> None:
    identity = container.identity_service
    dashboard = container.dashboard_service

    @app.route("/api/dashboard/admin", methods=["GET"], endpoint="admin_dashboard")
    @admin_required(identity)
    def admin_dashboard():
        return jsonify(dashboard.admin_summary().to_dict())

    @app.route("/api/dashboard/employees/<employee_id>", methods=["GET"], endpoint="employee_dashboard")
    @login_required(identity)
    def employee_dashboard(employee_id: str):
        ensure_self_or_admin(g.current_user, employee_id)
        return jsonify(dashboard.employee_summary(employee_id).to_dict())

    @app.route("/api/dashboard/usage", methods=["GET"], endpoint="leave_usage")
    @admin_required(identity)
    def leave_usage():
        return jsonify(dashboard.usage_by_employee())
