from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .container import Container, build_container
from .core.constants import DEFAULT_CURRENT_USER_LABEL, DEFAULT_SHIFTS, DEFAULT_UPCOMING_EVENTS_LIMIT
from .core.logger import get_logger, set_level
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .events.controller import register as register_events
from .grades.controller import register as register_grades
from .students.controller import register as register_students

logger = get_logger(__name__)


def register_routes(app: Flask, container: Container) -> None:
    @app.route("/health", endpoint="health")
    def health():
        return {"status": "ok"}

    register_students(app, container)
    register_grades(app, container)
    register_classes(app, container)
    register_attendance(app, container)
    register_events(app, container)
    register_announcements(app, container)
    register_dashboard(app, container)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass ``container`` to run the API on prebuilt (e.g. in-memory) repositories;
    otherwise the MySQL container is built from the active settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False
    set_level(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            shifts=getattr(settings, "SHIFTS", DEFAULT_SHIFTS),
            current_user_label=getattr(settings, "CURRENT_USER_LABEL", DEFAULT_CURRENT_USER_LABEL),
            upcoming_limit=int(getattr(settings, "UPCOMING_EVENTS_LIMIT", DEFAULT_UPCOMING_EVENTS_LIMIT)),
        )

    register_routes(app, container)
    return app
