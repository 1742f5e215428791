"""Error reporting for menu actions."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from core import get_logger
from core.exceptions import ApplicationError

logger = get_logger(__name__)


def report_errors(func: Callable) -> Callable:
    """Print application errors to the user instead of leaving the menu.

    Only ``ApplicationError`` is reported; anything else propagates to the
    entry point.

    Usage:
        @report_errors
        def buy_tickets(self):
            ...
    """
    @wraps(func)
    def wrapper(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return func(self, *args, **kwargs)
        except ApplicationError as e:
            logger.info(f"{func.__name__} rejected: {e}")
            self.write(str(e))
            return None
    return wrapper
