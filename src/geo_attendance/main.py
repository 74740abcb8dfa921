from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .identity.matcher import FaceMatcher
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_container(*, face_matcher: Optional[FaceMatcher] = None) -> Container:
    """Load settings for ``APP_ENV`` and wire the services.

    The HTTP layer (not part of this package) calls this once at startup and
    supplies the face matcher for its identity provider.
    """
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = dict(getattr(settings, "DB_CONFIG"))
    debug = bool(getattr(settings, "DEBUG", False))
    setup_logging(debug=debug)

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        apply_schema(conn, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(conn)))

    return build_container(
        db_config=db_config,
        tracking=getattr(settings, "TRACKING", None),
        attendance_defaults=getattr(settings, "ATTENDANCE_DEFAULTS", None),
        face_matcher=face_matcher,
        min_face_similarity=float(getattr(settings, "MIN_FACE_SIMILARITY", 80.0)),
        report_workers=int(getattr(settings, "REPORT_WORKERS", 4)),
    )
