"""
Logging configuration for Geo Attendance.

Provides plain stream logging with an employee context field so that
check-in, ping and auto-checkout lines can be grepped per employee.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar

_employee_ctx: ContextVar[str] = ContextVar("employee_id", default="-")


class EmployeeContextFilter(logging.Filter):
    """Add the current employee id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.employee_id = _employee_ctx.get()
        return True


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the service.

    Args:
        debug: Enable debug level logging
    """
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("[%(levelname)s] [employee=%(employee_id)s] %(name)s: %(message)s")
    )
    console_handler.addFilter(EmployeeContextFilter())

    root_logger.addHandler(console_handler)


@contextmanager
def employee_context(employee_id: str):
    """Tag every log line emitted inside the block with ``employee_id``."""
    token = _employee_ctx.set(str(employee_id))
    try:
        yield
    finally:
        _employee_ctx.reset(token)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
