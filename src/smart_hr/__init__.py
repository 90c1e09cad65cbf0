"""SmartHR core package.

Organized by feature modules (users, attendance, payroll) with a thin Flask
controller layer over service/repository layers backed by SQLite.
"""

__version__ = "1.0.0"
