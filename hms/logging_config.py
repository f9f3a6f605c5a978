"""
Configure logging for the application.
"""
import logging
from pathlib import Path

from .config import LOG_DIR, LOG_FILE, LOG_FORMAT, LOG_LEVEL


def setup_logging(log_dir: str = LOG_DIR, level: str = LOG_LEVEL) -> None:
    """
    Send application logs to a file, keeping the terminal for the menu.

    Args:
        log_dir: Directory to store the log file
        level: Level name, e.g. "INFO" or "DEBUG"
    """
    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(path / LOG_FILE)],
    )

    logger = logging.getLogger("hms")
    logger.info("Logging system initialized")
