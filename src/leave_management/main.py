from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import build_container, build_store
from .core.exceptions import AuthorizationError, IllegalTransitionError, ValidationError
from .reports.controller import register as register_reports
from .requests.controller import register as register_requests
from .store.repository import TableStore
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, store: Optional[TableStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    if store is None:
        store = build_store(
            backend=getattr(settings, "STORE_BACKEND", "memory"),
            store_path=getattr(settings, "STORE_PATH", None),
            db_config=getattr(settings, "DB_CONFIG", None),
            seed=bool(getattr(settings, "AUTO_SEED_DB", True)),
        )
    logger.info("Starting with settings=%s store=%s", settings_module, type(store).__name__)

    container = build_container(
        store=store,
        credential_policy=getattr(settings, "CREDENTIAL_POLICY", "plaintext"),
    )
    app.extensions["leave_management"] = container

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify(error=str(e)), 400

    @app.errorhandler(AuthorizationError)
    def _authorization_error(e: AuthorizationError):
        return jsonify(error=str(e)), 403

    @app.errorhandler(IllegalTransitionError)
    def _illegal_transition(e: IllegalTransitionError):
        return jsonify(error=str(e)), 409

    register_users(app, container)
    register_requests(app, container)
    register_reports(app, container)

    return app
