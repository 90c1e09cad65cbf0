from decimal import Decimal

from smart_hr.payroll.export import export_csv, write_csv
from smart_hr.payroll.model import PayrollLine


def _line(employee_id, name, gross, tax):
    gross, tax = Decimal(gross), Decimal(tax)
    return PayrollLine(
        employee_id=employee_id,
        name=name,
        hourly_rate=Decimal("100"),
        total_hours=Decimal("12"),
        gross_pay=gross,
        tax=tax,
        net_pay=gross - tax,
    )


def test_export_header_and_rows():
    text = export_csv([_line(2, "Kamal", "1200.00", "120.00"), _line(5, "Sunil", "0", "0")])

    assert text.splitlines() == [
        "ID,Name,Gross Salary,Tax,Net Salary",
        "2,Kamal,1200.00,120.00,1080.00",
        "5,Sunil,0.00,0.00,0.00",
    ]


def test_export_does_not_quote_commas():
    text = export_csv([_line(1, "Perera, Nimal", "10.00", "1.00")])
    assert text.splitlines()[1] == "1,Perera, Nimal,10.00,1.00,9.00"


def test_export_empty_has_header_only(tmp_path):
    path = write_csv(tmp_path / "payroll.csv", [])
    assert path.read_text(encoding="utf-8") == "ID,Name,Gross Salary,Tax,Net Salary\n"
