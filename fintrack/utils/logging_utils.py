import logging
import os

from fintrack import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("fintrack")


def setup_logging(level: str = None, log_file: str = None):
    """Attach handlers to the ``fintrack`` logger. Safe to call twice."""
    level = level or config.LOG_LEVEL
    log_file = log_file if log_file is not None else config.LOG_FILE

    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    # Logging in the terminal
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_store_call(log: logging.Logger, operation: str, details=""):
    log.info(f"{operation} | {details}")
