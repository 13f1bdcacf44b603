"""Structured logging configuration for simplecalc.

All loggers live under the ``simplecalc`` root:

- ``simplecalc.operands``: operand text accepted by the parser (DEBUG)
- ``simplecalc.evaluator``: each dispatch and each failure with its error code (DEBUG)
- ``simplecalc.api``: input rejected before evaluation (DEBUG)
- ``simplecalc.cli``: the calculation requested on the command line (INFO)

Records carrying a ``calc_code`` attribute (passed with ``extra=``) get the
calculator error code appended, so failures can be grepped by code.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER = "simplecalc"
CALC_CODE_ATTR = "calc_code"


class StructuredFormatter(logging.Formatter):
    """Formats entries as ``<timestamp> [LEVEL] name: message [code=CODE]``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        code = getattr(record, CALC_CODE_ATTR, None)
        if code:
            message = f"{message} [code={code}]"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Configure the ``simplecalc`` logger for one CLI run.

    Repeated calls replace the handlers of the previous run instead of
    stacking them.

    Args:
        level: Logging level name; unknown names fall back to WARNING
        log_file: Optional file path that receives the same entries as stderr

    Returns:
        The ``simplecalc`` root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``simplecalc.<name>`` logger for a package module."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
