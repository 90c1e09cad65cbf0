from __future__ import annotations

import importlib

from dotenv import load_dotenv

from smart_hr.common.passwords import PasswordHasher
from smart_hr.config import get_settings_module
from smart_hr.core.logging import configure_logging
from smart_hr.database.bootstrap import initialize_database, list_tables
from smart_hr.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    conn = DatabaseConnection.get_instance(DBConfig(path=settings.DB_PATH))
    initialize_database(conn, PasswordHasher(), admin_password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", None))
    tables = list_tables(conn)
    print(f"OK: schema ready -> {conn.path} (tables={len(tables)})")


if __name__ == "__main__":
    main()
