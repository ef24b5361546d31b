from __future__ import annotations

from flask import Flask, g, jsonify, request, session

from ..container import Container
from .guards import admin_required, ensure_self_or_admin, json_object_body, login_required


def register(app: Flask, container: Container) -> None:
    identity = container.identity_service
    directory = container.directory_service

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = json_object_body()
        user = identity.login(str(payload.get("username", "")), str(payload.get("password", "")))
        if not user:
            return jsonify(error="Invalid username or password"), 401
        session["user_id"] = user.id
        session["role"] = user.role.value
        return jsonify(user.to_record())

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        identity.logout()
        session.clear()
        return jsonify(ok=True)

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required(identity)
    def me():
        return jsonify(g.current_user.to_record())

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @admin_required(identity)
    def list_employees():
        employees = directory.search_employees(request.args.get("q", ""))
        return jsonify([u.to_record() for u in employees])

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @admin_required(identity)
    def add_employee():
        payload = dict(json_object_body())
        password = payload.pop("password", "")
        user = directory.add_employee(payload, password)
        return jsonify(user.to_record()), 201

    @app.route("/api/employees/<user_id>", methods=["GET"], endpoint="get_employee")
    @login_required(identity)
    def get_employee(user_id: str):
        ensure_self_or_admin(g.current_user, user_id)
        user = directory.get_employee(user_id)
        if not user:
            return jsonify(error="Employee not found"), 404
        return jsonify(user.to_record())

    @app.route("/api/employees/<user_id>", methods=["PATCH"], endpoint="update_employee")
    @admin_required(identity)
    def update_employee(user_id: str):
        user = directory.update_employee(user_id, json_object_body())
        if not user:
            return jsonify(error="Employee not found"), 404
        return jsonify(user.to_record())

    @app.route("/api/employees/<user_id>", methods=["DELETE"], endpoint="remove_employee")
    @admin_required(identity)
    def remove_employee(user_id: str):
        if not directory.remove_employee(user_id):
            return jsonify(error="Employee not found"), 404
        return jsonify(removed=True)
