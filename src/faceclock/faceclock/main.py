from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import parse_clock
from .common.responses import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .attendance.pairing import pairing_for
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Flask application factory.

    Pass a pre-built ``container`` to skip settings-driven wiring (tests do this).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).target)

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            media_root=getattr(settings, "MEDIA_ROOT"),
            media_base_url=getattr(settings, "MEDIA_BASE_URL"),
            face_verify_url=getattr(settings, "FACE_VERIFY_URL", ""),
            face_verify_timeout=float(getattr(settings, "FACE_VERIFY_TIMEOUT", 10)),
            standard_hours=float(getattr(settings, "STANDARD_HOURS", 8)),
            late_after=parse_clock(getattr(settings, "LATE_AFTER", "09:05")),
            fallback_hourly_rate=float(getattr(settings, "FALLBACK_HOURLY_RATE", 50000)),
            history_page_size=int(getattr(settings, "HISTORY_PAGE_SIZE", 10)),
            pairing=pairing_for(getattr(settings, "PAIRING", "positional")),
        )

    register_error_handlers(app)
    register_attendance(app, container)
    register_employees(app, container)
    register_payroll(app, container)

    return app
