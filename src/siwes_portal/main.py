from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .locations.controller import register as register_locations
from .profiles.controller import register as register_profiles
from .reports.controller import register as register_reports
from .session.guards import current_session

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("siwes_portal").setLevel(level)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config.from_object(settings)
    app.secret_key = app.config["SECRET_KEY"]
    app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    db_config = app.config["DB_CONFIG"]
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        if app.config.get("AUTO_INIT_DB"):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, settings=app.config)

    @app.context_processor
    def inject_portal():
        recorder = container.attendance_recorder
        return {
            "portal": current_session(),
            "geo_timeout_ms": recorder.timeout_seconds * 1000,
            "geo_max_age_ms": recorder.max_age_seconds * 1000,
        }

    register_auth(app, container)
    register_attendance(app, container)
    register_profiles(app, container)
    register_reports(app, container)
    register_locations(app, container)

    return app
