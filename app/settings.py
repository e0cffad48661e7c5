"""
Runtime configuration and logging.

Values come from the environment (a .env file in the project root is loaded
first):

    TEACHER_DATA_SOURCE   path or http(s) URL of teacherData.json
                          (default: data/teacherData.json)
    SECTION_ALIASES_FILE  optional JSON file of extra section aliases
    LOG_DIR               directory for the rotating log (default: logs/)
    LOG_LEVEL             root log level (default: INFO)
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

ROOT_DIR  = Path(__file__).parent.parent
DATA_DIR  = ROOT_DIR / "data"
DATA_FILE = DATA_DIR / "teacherData.json"


def data_source() -> str:
    return os.getenv("TEACHER_DATA_SOURCE") or str(DATA_FILE)


def alias_file() -> Path | None:
    value = os.getenv("SECTION_ALIASES_FILE")
    return Path(value) if value else None


def log_dir() -> Path:
    value = os.getenv("LOG_DIR")
    return Path(value) if value else ROOT_DIR / "logs"


def setup_logging() -> None:
    """Log to stdout and logs/app.log (rotating, 5 MB max, 3 backups)."""
    root = logging.getLogger()
    if getattr(root, "_teacher_filter_configured", False):
        return

    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    rotating = logging.handlers.RotatingFileHandler(
        directory / "app.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    root.addHandler(stream)
    root.addHandler(rotating)
    root._teacher_filter_configured = True
