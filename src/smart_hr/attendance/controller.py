from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import date_arg, error_response, failure_response, load_session_context, login_required
from ..container import Container
from ..core.outcome import Failure, Outcome
from .model import AttendanceRecord, AttendanceReportRow


def record_to_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.id,
        "employee_id": record.employee_id,
        "check_in": record.check_in.isoformat(sep=" "),
        "check_out": record.check_out.isoformat(sep=" ") if record.check_out else None,
        "hours": round(record.hours, 2) if record.hours is not None else None,
    }


def row_to_dict(row: AttendanceReportRow) -> dict:
    data = record_to_dict(row.record)
    data["employee_name"] = row.employee_name
    data["hours_worked"] = row.hours_label
    return data


def register(app: Flask, container: Container) -> None:
    identities = container.identities_repo
    attendance = container.attendance_service

    @app.route("/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required(identities)
    def check_in():
        outcome = attendance.check_in(load_session_context(identities).current.id)
        if not outcome.ok:
            return failure_response(outcome)
        return jsonify(record_to_dict(outcome.unwrap())), 201

    @app.route("/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required(identities)
    def check_out():
        outcome = attendance.check_out(load_session_context(identities).current.id)
        if not outcome.ok:
            return failure_response(outcome)
        return jsonify(record_to_dict(outcome.unwrap()))

    @app.route("/attendance/status", methods=["GET"], endpoint="attendance_status")
    @login_required(identities)
    def attendance_status():
        record = attendance.get_status(load_session_context(identities).current.id)
        return jsonify(
            {
                "checked_in": record is not None,
                "open_record": record_to_dict(record) if record else None,
            }
        )

    @app.route("/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required(identities)
    def attendance_list():
        ctx = load_session_context(identities)
        today = now_local().date()
        try:
            start = date_arg("from", today)
            end = date_arg("to", today)
        except ValueError:
            return error_response("Dates must be YYYY-MM-DD", 400, "invalid_date")

        employee_id = request.args.get("employee_id", type=int)
        if not ctx.is_admin():
            # Employees only ever see their own records.
            if employee_id is not None and not ctx.is_self(employee_id):
                return failure_response(Outcome.fail(Failure.FORBIDDEN))
            employee_id = ctx.current.id

        rows = attendance.list_by_range(start, end, employee_id=employee_id)
        return jsonify([row_to_dict(r) for r in rows])
