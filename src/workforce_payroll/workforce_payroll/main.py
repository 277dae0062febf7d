from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container, build_repositories
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .organization.controller import register as register_organization
from .payroll.controller import register as register_payroll
from .prepayments.controller import register as register_prepayments

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        logger.info("demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``container`` is injected by tests; otherwise one is built from the
    settings module selected by ``APP_ENV``.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["COMPANY_NAME"] = getattr(settings, "COMPANY_NAME", "")
    configure_logging(app.config["DEBUG"])

    if container is None:
        db_type = getattr(settings, "DB_TYPE", "mysql")
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            "settings=%s db=%s %s@%s:%s/%s",
            settings_module,
            db_type,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(
            repositories=build_repositories(db_type=db_type, db_config=db_config),
            rounding_places=getattr(settings, "ROUNDING_PLACES", 2),
            batch_max_workers=getattr(settings, "BATCH_MAX_WORKERS", 8),
        )

    register_error_handlers(app)
    register_organization(app, container)
    register_attendance(app, container)
    register_prepayments(app, container)
    register_payroll(app, container)

    return app
