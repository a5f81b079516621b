import logging
import sys
from logging.handlers import RotatingFileHandler
from . import settings


def setup_logger(name: str = None, log_level: int | str = None) -> logging.Logger:
    """
    Wires the shop log: short messages to stdout for the CLI, and timestamped records
    of restocks, sales, rejected input and webhook posts to LOG_DIR/shop.log.
    The level defaults to settings.LOG_LEVEL.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level or settings.LOG_LEVEL)

    # Prevent adding handlers multiple times if logger is already set up
    if logger.handlers:
        return logger

    # Formatters
    console_format = logging.Formatter("%(message)s")  # Keep console output clean/minimal
    file_format = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # 1. Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # 2. File Handler
    log_dir = settings.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "shop.log"

    file_handler = RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
    )
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    return logger
