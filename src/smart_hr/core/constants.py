"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_ADMIN_NAME = "Admin"
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"

TAX_RATE = Decimal("0.10")
MONEY_QUANTUM = Decimal("0.01")

PAYROLL_CSV_HEADER = "ID,Name,Gross Salary,Tax,Net Salary"

DB_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
