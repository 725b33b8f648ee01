"""Runtime configuration defaults, environment overrides and logging setup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DB_PATH = "data/dinerdesk.db"
DEBUG_LOG_PATH = "/tmp/dinerdesk-debug.log"
EXPORT_PATH = "data/dinerdesk-export.json"

TABLE_COUNT = 14

MENU_BASE_URL = "http://localhost:8000/menu.html"
QR_ENDPOINT = "https://api.qrserver.com/v1/create-qr-code/"
QR_SIZE_PX = 200

# Longest edge for stored menu/gallery images.
IMAGE_MAX_EDGE_PX = 480

SLOT_MENU = "menu"
SLOT_GALLERY = "gallery"
SLOT_KITCHEN = "kitchen_orders"

_DB_PATH_ENV = "DINERDESK_DB_PATH"
_MENU_BASE_URL_ENV = "DINERDESK_MENU_BASE_URL"
_DEBUG_LOG_ENV = "DINERDESK_DEBUG_LOG"


def _env_or(name: str, default: str) -> str:
    value = os.environ.get(name, "").strip()
    return value or default


def resolve_db_path() -> str:
    """Database file, overridable with DINERDESK_DB_PATH."""
    return _env_or(_DB_PATH_ENV, DB_PATH)


def resolve_menu_base_url() -> str:
    """Public menu page that table QR codes point at."""
    return _env_or(_MENU_BASE_URL_ENV, MENU_BASE_URL)


def resolve_debug_log_path() -> str:
    return _env_or(_DEBUG_LOG_ENV, DEBUG_LOG_PATH)


def setup_logging(level: int = logging.INFO, log_path: str | None = None) -> logging.Logger:
    """
    Send package logs to the debug log file.

    The terminal belongs to the UI, so nothing goes to stdout. If the file
    cannot be opened, logging is silently disabled instead of stopping the app.
    """
    logger = logging.getLogger("dinerdesk")
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    path = Path(log_path or resolve_debug_log_path())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return logger
