"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from smart_hr.config import get_settings_module
from smart_hr.container import build_container
from smart_hr.database.bootstrap import initialize_database
from smart_hr.users.session import SessionContext


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_path=settings.DB_PATH)
    initialize_database(container.conn, container.hasher)

    session = SessionContext()
    outcome = container.auth_service.login(session, "admin", "admin123")
    print("login:", outcome.reason or "ok", session)

    report = container.payroll_service.compute_for_all_employees(session, None, None)
    for line in report.value or []:
        print(line.employee_id, line.name, line.gross_pay, line.tax, line.net_pay)


if __name__ == "__main__":
    main()
