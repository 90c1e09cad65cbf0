from __future__ import annotations

import importlib
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.web import error_response
from .config import get_settings_module
from .container import build_container
from .core.exceptions import StorageError
from .core.logging import configure_logging, get_logger
from .database.bootstrap import initialize_database
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

logger = get_logger(__name__)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    config = {
        key: getattr(settings, key)
        for key in dir(settings)
        if key.isupper()
    }
    config.update(overrides or {})

    app.secret_key = config["SECRET_KEY"]
    app.config["DEBUG"] = bool(config.get("DEBUG", False))
    app.config["TESTING"] = bool(config.get("TESTING", False))
    app.config["DB_PATH"] = str(config["DB_PATH"])

    configure_logging(config.get("LOG_LEVEL", "INFO"))
    logger.info("settings=%s db=%s", settings_module, app.config["DB_PATH"])

    container = build_container(db_path=app.config["DB_PATH"])
    if config.get("AUTO_INIT_DB", True):
        initialize_database(
            container.conn,
            container.hasher,
            admin_password=config.get("DEFAULT_ADMIN_PASSWORD"),
        )
    app.extensions["smart_hr"] = container

    @app.errorhandler(StorageError)
    def storage_error(exc: StorageError):
        logger.error("storage failure: %s", exc, exc_info=exc)
        if app.config["DEBUG"]:
            return error_response(f"Storage error: {exc}", 500, "storage_error")
        return error_response("Storage error", 500, "storage_error")

    register_users(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app
