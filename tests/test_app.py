from __future__ import annotations

from datetime import date


def _create(admin_client, **overrides):
    body = {"name": "Nimal", "username": "nimal", "password": "secret", "hourly_rate": "100"}
    body.update(overrides)
    return admin_client.post("/admin/employees", json=body)


def test_login_failures_are_distinct(client):
    unknown = client.post("/login", json={"username": "ghost", "password": "x"})
    wrong = client.post("/login", json={"username": "admin", "password": "wrong"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json()["error"] == "auth_not_found"
    assert wrong.get_json() == {"error": "auth_mismatch", "message": "Incorrect password"}


def test_me_requires_login(client):
    assert client.get("/me").status_code == 401


def test_admin_login_and_logout(admin_client):
    assert admin_client.get("/me").get_json()["username"] == "admin"

    assert admin_client.post("/logout").status_code == 200
    assert admin_client.get("/me").status_code == 401


def test_employee_crud(admin_client):
    created = _create(admin_client)
    assert created.status_code == 201
    emp = created.get_json()
    assert emp["hourly_rate"] == "100.00"
    assert emp["role"] == "Employee"

    assert _create(admin_client).get_json()["error"] == "duplicate_username"

    updated = admin_client.put(
        f"/admin/employees/{emp['id']}", json={"name": "Nimal P", "username": "nimal", "hourly_rate": "120"}
    )
    assert updated.status_code == 200
    assert updated.get_json()["name"] == "Nimal P"

    listing = admin_client.get("/admin/employees").get_json()
    assert [e["username"] for e in listing] == ["nimal"]

    assert admin_client.delete(f"/admin/employees/{emp['id']}").status_code == 200
    assert admin_client.get(f"/admin/employees/{emp['id']}").status_code == 404


def test_employee_validation_errors(admin_client):
    resp = _create(admin_client, hourly_rate="-5")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Hourly rate must be a non-negative number"


def test_employee_cannot_reach_admin_routes(admin_client):
    _create(admin_client, username="worker", password="pw")
    admin_client.post("/logout")
    assert admin_client.post("/login", json={"username": "worker", "password": "pw"}).status_code == 200

    assert admin_client.get("/admin/employees").status_code == 403
    assert admin_client.get("/admin/payroll").status_code == 403
    assert admin_client.get("/attendance?employee_id=1").status_code == 403


def test_check_in_out_flow_and_payroll(admin_client):
    _create(admin_client, username="worker", password="pw")
    admin_client.post("/logout")
    admin_client.post("/login", json={"username": "worker", "password": "pw"})

    assert admin_client.get("/attendance/status").get_json()["checked_in"] is False
    assert admin_client.post("/attendance/check-in").status_code == 201
    again = admin_client.post("/attendance/check-in")
    assert again.status_code == 409
    assert again.get_json()["error"] == "already_open"
    assert admin_client.get("/attendance/status").get_json()["checked_in"] is True

    closed = admin_client.post("/attendance/check-out")
    assert closed.status_code == 200
    assert closed.get_json()["check_out"] is not None
    assert admin_client.post("/attendance/check-out").get_json()["error"] == "no_open_session"

    rows = admin_client.get("/attendance").get_json()
    assert len(rows) == 1

    mine = admin_client.get("/payroll/me").get_json()
    assert mine["name"] == "Nimal"
    assert mine["tax"] == "0.00"


def test_payroll_csv_export(admin_client):
    _create(admin_client, name="Kamal", username="kamal")
    today = date.today().isoformat()

    resp = admin_client.get(f"/admin/payroll.csv?from={today}&to={today}")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    lines = resp.get_data(as_text=True).splitlines()
    assert lines[0] == "ID,Name,Gross Salary,Tax,Net Salary"
    assert lines[1].endswith(",Kamal,0.00,0.00,0.00")


def test_bad_date_is_rejected(admin_client):
    resp = admin_client.get("/admin/payroll?from=01/02/2025")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_date"


def test_deleted_user_session_is_dropped(admin_client):
    emp = _create(admin_client, username="gone", password="pw").get_json()
    admin_client.post("/logout")
    admin_client.post("/login", json={"username": "gone", "password": "pw"})
    assert admin_client.get("/me").status_code == 200

    app = admin_client.application
    container = app.extensions["smart_hr"]
    container.identities_repo.delete_by_id(emp["id"])

    assert admin_client.get("/me").status_code == 401


def test_admin_account_cannot_be_deleted(admin_client):
    me = admin_client.get("/me").get_json()

    resp = admin_client.delete(f"/admin/employees/{me['id']}")

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "admin_protected"
    assert admin_client.get("/me").status_code == 200


def test_update_without_hourly_rate_is_rejected(admin_client):
    emp = _create(admin_client, hourly_rate="100").get_json()

    resp = admin_client.put(f"/admin/employees/{emp['id']}", json={"name": "Nimal", "username": "nimal"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_rate"
    assert admin_client.get(f"/admin/employees/{emp['id']}").get_json()["hourly_rate"] == "100.00"
