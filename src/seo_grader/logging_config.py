"""Logging setup shared by the CLI and the HTTP server.

Log records go to stderr so that report output on stdout (text or JSON)
stays clean for piping.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from seo_grader.config import settings
from seo_grader.constants import LOG_FORMAT, QUIET_LOGGERS

logger = logging.getLogger(__name__)


def resolve_level(level: Optional[str] = None) -> Optional[int]:
    """Numeric level for a level name, falling back to LOG_LEVEL.

    Returns None when the name is not a known level.
    """
    name = (level or settings.LOG_LEVEL or "INFO").upper()
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else None


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
) -> int:
    """Configure the root logger for a grader process.

    Args:
        level: Level name; defaults to the LOG_LEVEL setting
        log_file: Optional file that receives a copy of every record
        format_string: Optional custom format string

    Returns:
        The numeric level that was applied
    """
    numeric_level = resolve_level(level)
    unknown_level = numeric_level is None
    if unknown_level:
        numeric_level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format=format_string or LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    if unknown_level:
        logger.warning(f"Unknown log level {level or settings.LOG_LEVEL!r}, using INFO")
    return numeric_level
