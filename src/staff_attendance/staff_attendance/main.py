from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.constants import UPLOADS_URL_PREFIX
from .core.exceptions import AuthorizationError, NotFoundError, StorageError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .documents.controller import register as register_documents
from .payroll.controller import register as register_payroll
from .staff.controller import register as register_staff

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def load_settings(settings_module: Optional[str] = None) -> Any:
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module())


def _register_error_handlers(app: Flask) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return _error(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(StorageError)
    def _storage(e: StorageError):
        logger.error("Storage failure: %s", e)
        return _error("File storage failed", 500)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    settings = load_settings(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = getattr(settings, "MAX_CONTENT_LENGTH", None)
    CORS(app)

    if container is None:
        container = build_container(settings)
        if bool(getattr(settings, "AUTO_INIT_DB", False)) and container.conn is not None:
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.debug("Schema ready (tables=%d)", len(list_tables(container.conn)))

    logger.debug("settings=%s uploads=%s", settings.__name__, container.blobs.root)

    @app.route(f"{UPLOADS_URL_PREFIX}/<path:filename>", methods=["GET"], endpoint="uploads")
    def uploads(filename: str):
        return send_from_directory(container.blobs.root.resolve(), filename)

    register_staff(app, container)
    register_documents(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    _register_error_handlers(app)

    return app
