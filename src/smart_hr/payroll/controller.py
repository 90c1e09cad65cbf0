from __future__ import annotations

from flask import Flask, Response, jsonify

from ..common.datetime_utils import now_local
from ..common.web import admin_required, date_arg, error_response, failure_response, load_session_context, login_required
from ..container import Container
from .export import export_csv
from .model import PayrollLine


def line_to_dict(line: PayrollLine) -> dict:
    return {
        "employee_id": line.employee_id,
        "name": line.name,
        "hourly_rate": f"{line.hourly_rate:.2f}",
        "total_hours": round(float(line.total_hours), 2),
        "gross_pay": f"{line.gross_pay:.2f}",
        "tax": f"{line.tax:.2f}",
        "net_pay": f"{line.net_pay:.2f}",
    }


def register(app: Flask, container: Container) -> None:
    identities = container.identities_repo
    payroll = container.payroll_service

    def _range(default_today: bool):
        today = now_local().date() if default_today else None
        return date_arg("from", today), date_arg("to", today)

    @app.route("/payroll/me", methods=["GET"], endpoint="my_payroll")
    @login_required(identities)
    def my_payroll():
        # Without a range this is the lifetime total, like the desktop "My Payroll" view.
        try:
            start, end = _range(default_today=False)
        except ValueError:
            return error_response("Dates must be YYYY-MM-DD", 400, "invalid_date")

        outcome = payroll.compute_for_employee(load_session_context(identities).current.id, start, end)
        if not outcome.ok:
            return failure_response(outcome)
        return jsonify(line_to_dict(outcome.unwrap()))

    @app.route("/admin/payroll", methods=["GET"], endpoint="payroll_report")
    @admin_required(identities)
    def payroll_report():
        try:
            start, end = _range(default_today=True)
        except ValueError:
            return error_response("Dates must be YYYY-MM-DD", 400, "invalid_date")

        outcome = payroll.compute_for_all_employees(load_session_context(identities), start, end)
        if not outcome.ok:
            return failure_response(outcome)
        return jsonify([line_to_dict(line) for line in outcome.unwrap()])

    @app.route("/admin/payroll.csv", methods=["GET"], endpoint="payroll_report_csv")
    @admin_required(identities)
    def payroll_report_csv():
        try:
            start, end = _range(default_today=True)
        except ValueError:
            return error_response("Dates must be YYYY-MM-DD", 400, "invalid_date")

        outcome = payroll.compute_for_all_employees(load_session_context(identities), start, end)
        if not outcome.ok:
            return failure_response(outcome)

        filename = f"Payroll_{now_local():%Y%m%d}.csv"
        return Response(
            export_csv(outcome.unwrap()),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
