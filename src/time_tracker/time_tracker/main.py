from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import status_for
from .container import Container, build_container, load_all, save_all
from .core.exceptions import DomainError
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _save_on_exit(container: Container) -> None:
    try:
        save_all(container)
    except DomainError:
        logger.exception("Saving data on exit failed")


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    for key in ("SECRET_KEY", "DEBUG", "LOG_LEVEL", "DATA_DIR", "EMPLOYEES_FILE", "TIME_RECORDS_FILE", "AUTO_SAVE_ON_EXIT"):
        app.config[key] = getattr(settings, key, None)
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config.update(overrides or {})
    app.secret_key = app.config["SECRET_KEY"]

    logging.basicConfig(level=app.config.get("LOG_LEVEL") or "INFO", format=LOG_FORMAT)
    logger.info("settings=%s data_dir=%s", settings_module, Path(app.config["DATA_DIR"]).resolve())

    container = build_container(
        data_dir=app.config["DATA_DIR"],
        employees_file=app.config["EMPLOYEES_FILE"],
        time_records_file=app.config["TIME_RECORDS_FILE"],
    )
    load_all(container)
    app.extensions["time_tracker"] = container

    if app.config.get("AUTO_SAVE_ON_EXIT"):
        atexit.register(_save_on_exit, container)

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = status_for(exc)
        if status >= 500:
            logger.error("Request failed: %s", exc)
        return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), status

    @app.route("/api/admin/save", methods=["POST"], endpoint="save_data")
    def save_data():
        save_all(container)
        return jsonify(
            {
                "success": True,
                "employees": len(container.roster),
                "time_records": len(container.ledger),
            }
        )

    register_employees(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app
