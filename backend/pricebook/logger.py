"""
Logging setup shared by the store service and the web front-end.

Console logging is always on; file logging is optional.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    enable_file: bool = False,
    log_dir: Optional[str] = None,
) -> None:
    """
    Configures the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_file: If True, also writes to a dated file in log_dir
        log_dir: Directory for log files (defaults to ./logs)
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    if not enable_file:
        return

    directory = Path(log_dir or "logs")
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / f"pricebook_{datetime.now().strftime('%Y%m%d')}.log"

    root = logging.getLogger()
    # Avoid adding the same file handler twice on reload
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_file.resolve():
            return

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level.upper())
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
