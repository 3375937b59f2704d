"""Boundary adapter for read-only balance and statistics operations."""

import functools
import logging

from exceptions import LedgerError

logger = logging.getLogger(__name__)


def read_operation(default):
    """
    Wrap a read operation ``op(store, subject, *args)`` so that it never faults.

    ``default`` is called with the operation's arguments to build the fallback
    result. It is returned when there is no subject (anonymous caller) and when
    the operation raises anything other than a LedgerError.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(store, subject, *args, **kwargs):
            if subject is None:
                return default(store, subject, *args, **kwargs)
            try:
                return func(store, subject, *args, **kwargs)
            except LedgerError:
                raise
            except Exception:
                logger.exception(f"{func.__name__} failed for user {getattr(subject, 'id', None)}; returning default")
                return default(store, subject, *args, **kwargs)
        return wrapper
    return decorator
