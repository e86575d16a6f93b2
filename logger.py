# logger.py
import logging
import os
import sys
from typing import Optional

LOG_NAME = "installer_wizard"
LOG_FILE = "/var/log/installer_wizard.log"
FALLBACK_LOG_FILE = "/tmp/installer_wizard.log"
LOG_ENV = "INSTALLER_LOG"
DEBUG_ENV = "INSTALLER_DEBUG"


def _log_file_handler(path: str) -> logging.FileHandler:
    # The live system may mount /var/log read-only
    try:
        return logging.FileHandler(path)
    except OSError:
        return logging.FileHandler(FALLBACK_LOG_FILE)


def setup_logger(name: str = LOG_NAME, path: Optional[str] = None) -> logging.Logger:
    """
    File logging at DEBUG plus warnings on stderr.

    The file defaults to LOG_FILE and can be moved with $INSTALLER_LOG.
    With $INSTALLER_DEBUG set, stderr also carries the step-by-step INFO
    messages.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    fh = _log_file_handler(path or os.environ.get(LOG_ENV) or LOG_FILE)
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(logging.INFO if os.environ.get(DEBUG_ENV) else logging.WARNING)
    sh.setFormatter(fmt)

    logger.addHandler(fh)
    logger.addHandler(sh)
    return logger

log = setup_logger()
