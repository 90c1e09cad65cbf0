from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import (
    SESSION_KEY,
    admin_required,
    error_response,
    failure_response,
    load_session_context,
    login_required,
)
from ..container import Container
from .model import Identity


def identity_to_dict(identity: Identity) -> dict:
    return {
        "id": identity.id,
        "name": identity.name,
        "username": identity.username,
        "hourly_rate": f"{identity.hourly_rate:.2f}",
        "role": identity.role.value,
    }


def register(app: Flask, container: Container) -> None:
    identities = container.identities_repo
    employees = container.employee_service

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        outcome = container.auth_service.verify(str(data.get("username", "")), str(data.get("password", "")))
        if not outcome.ok:
            return failure_response(outcome)

        identity = outcome.unwrap()
        session.clear()
        session[SESSION_KEY] = identity.id
        return jsonify(identity_to_dict(identity))

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        load_session_context(identities).logout()
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required(identities)
    def me():
        return jsonify(identity_to_dict(load_session_context(identities).current))

    @app.route("/admin/employees", methods=["GET"], endpoint="employees_list")
    @admin_required(identities)
    def employees_list():
        return jsonify([identity_to_dict(i) for i in employees.list_employees()])

    @app.route("/admin/employees", methods=["POST"], endpoint="employees_create")
    @admin_required(identities)
    def employees_create():
        data = request.get_json(silent=True) or {}
        outcome = employees.create(
            load_session_context(identities),
            name=data.get("name") or "",
            username=data.get("username") or "",
            password=data.get("password") or "",
            hourly_rate=data.get("hourly_rate", "0"),
        )
        if not outcome.ok:
            return failure_response(outcome)
        return jsonify(identity_to_dict(outcome.unwrap())), 201

    @app.route("/admin/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @admin_required(identities)
    def employees_get(employee_id: int):
        identity = employees.get(employee_id)
        if not identity:
            return error_response("Employee record not found", 404, "not_found")
        return jsonify(identity_to_dict(identity))

    @app.route("/admin/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @admin_required(identities)
    def employees_update(employee_id: int):
        data = request.get_json(silent=True) or {}
        outcome = employees.update(
            load_session_context(identities),
            employee_id,
            name=data.get("name") or "",
            username=data.get("username") or "",
            hourly_rate=data.get("hourly_rate"),
            password=data.get("password"),
        )
        if not outcome.ok:
            return failure_response(outcome)
        return jsonify(identity_to_dict(outcome.unwrap()))

    @app.route("/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @admin_required(identities)
    def employees_delete(employee_id: int):
        outcome = employees.delete(load_session_context(identities), employee_id)
        if not outcome.ok:
            return failure_response(outcome)
        return jsonify({"deleted": outcome.unwrap()})
