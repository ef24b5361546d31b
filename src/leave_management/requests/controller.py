from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..container import Container
from ..core.exceptions import AuthorizationError
from ..users.guards import admin_required, ensure_self_or_admin, json_object_body, login_required


def register(app: Flask, container: Container) -> None:
    identity = container.identity_service
    leaves = container.leave_service

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    @admin_required(identity)
    def list_leave_requests():
        items = leaves.list_all(status=request.args.get("status") or None)
        return jsonify([r.to_record() for r in items])

    @app.route("/api/leave-requests", methods=["POST"], endpoint="submit_leave")
    @login_required(identity)
    def submit_leave():
        user = g.current_user
        if not user.is_employee:
            raise AuthorizationError("Only employees can apply for leave")

        payload = json_object_body()
        created = leaves.submit(
            employee_id=user.id,
            employee_name=user.name,
            department=user.department,
            leave_type=payload.get("type", ""),
            start_date=payload.get("startDate"),
            end_date=payload.get("endDate"),
            reason=payload.get("reason", ""),
        )
        return jsonify(created.to_record()), 201

    @app.route("/api/employees/<employee_id>/leave-requests", methods=["GET"], endpoint="employee_leave_requests")
    @login_required(identity)
    def employee_leave_requests(employee_id: str):
        ensure_self_or_admin(g.current_user, employee_id)
        items = leaves.list_for_employee(employee_id, status=request.args.get("status") or None)
        return jsonify([r.to_record() for r in items])

    @app.route("/api/leave-requests/<request_id>/status", methods=["POST"], endpoint="set_leave_status")
    @admin_required(identity)
    def set_leave_status(request_id: str):
        payload = json_object_body()
        decided = leaves.set_status(request_id, payload.get("status", ""), payload.get("rejectionReason"))
        if not decided:
            return jsonify(error="Leave request not found"), 404
        return jsonify(decided.to_record())
