from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..core.constants import PAYROLL_CSV_HEADER
from .model import PayrollLine


def _money(value) -> str:
    return f"{value:.2f}"


def export_csv(lines: Iterable[PayrollLine]) -> str:
    """Payroll export consumed by operators.

    Fields are joined with commas and never quoted, so a comma inside a name
    shifts that row's columns.
    """
    out = [PAYROLL_CSV_HEADER]
    for line in lines:
        out.append(
            ",".join(
                [
                    str(line.employee_id),
                    line.name,
                    _money(line.gross_pay),
                    _money(line.tax),
                    _money(line.net_pay),
                ]
            )
        )
    return "\n".join(out) + "\n"


def write_csv(path: str | Path, lines: Iterable[PayrollLine]) -> Path:
    path = Path(path)
    path.write_text(export_csv(lines), encoding="utf-8")
    return path
