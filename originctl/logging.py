"""Logging configuration for the originctl package."""
import logging
import os
from typing import Optional

from originctl.config import Config

AUDIT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_audit_log(log_file: Optional[str] = None, level: int = logging.INFO) -> Optional[logging.Handler]:
    """
    Mirror every ``originctl.*`` record to an audit file.

    Args:
        log_file: Audit log file; defaults to ORIGINCTL_LOG_FILE
        level: Lowest level written to the file (default: logging.INFO)

    Returns:
        The file handler, or None when no audit file is configured
    """
    log_file = log_file or Config.LOG_FILE
    if not log_file:
        return None

    logger = logging.getLogger("originctl")
    path = os.path.abspath(os.path.expanduser(str(log_file)))

    # Don't add the same file twice (cli and api both call this)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return handler

    handler = logging.FileHandler(path)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(AUDIT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)

    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)

    return handler
