"""
Logging configuration
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from core.config import settings

# Between INFO and WARNING so migration milestones stand out on the console
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a message at SUCCESS level"""
    logger.log(SUCCESS, message)


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None):
    """Configure application logging"""

    # Get log level from settings
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    if verbose:
        log_level = logging.DEBUG

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True
    )

    # Set SQLAlchemy logging to WARNING to reduce noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {logging.getLevelName(log_level)} level")


def migration_log_file(log_dir: Path) -> Path:
    """Timestamped log file path for one migration run"""
    stamp = datetime.utcnow().strftime("%Y-%m-%dT%H-%M-%S")
    return log_dir / f"migration-{stamp}.log"
