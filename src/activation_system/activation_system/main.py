from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .campaigns.controller import register as register_campaigns
from .container import build_container
from .database.bootstrap import apply_schema, ensure_demo_users
from .database.connection import DBConfig, DatabaseConnection
from .database.memory_store import InMemoryDocumentStore
from .database.store import DocumentStore
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, store: Optional[DocumentStore] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if store is None and getattr(settings, "STORE_BACKEND", "mysql") == "memory":
        store = InMemoryDocumentStore()

    if store is None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        db_config = getattr(settings, "DB_CONFIG")
        apply_schema(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))

    container = build_container(settings, store=store)

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_users(container.store)

    logger.info("Activation dashboard ready (settings=%s)", settings_module)

    register_users(app, container)
    register_attendance(app, container)
    register_campaigns(app, container)
    register_reports(app, container)

    app.extensions["activation_container"] = container
    return app
