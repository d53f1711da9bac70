"""Translation of database connectivity failures into StoreUnavailableError."""

import functools
import logging

from django.db import InterfaceError, OperationalError

from apps.payments.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


def store_guard(func):
    """
    Wrap a store-backed operation so connectivity errors surface as 503s.

    The wrapped call is never retried; the caller decides whether to back off.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            logger.exception("Payment store unavailable during %s", func.__qualname__)
            raise StoreUnavailableError() from e

    return wrapper
