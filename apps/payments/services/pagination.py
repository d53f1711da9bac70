"""Page-based slicing of filtered payments."""

import math
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Q

from apps.payments.models import Payment
from apps.payments.exceptions import InvalidPaginationError
from .store import store_guard


def filtered_payments(predicate: Optional[Q] = None):
    """Payments matching ``predicate``, newest first with id as tiebreaker."""
    queryset = Payment.objects.all()
    if predicate is not None:
        queryset = queryset.filter(predicate)
    return queryset.order_by('-created_at', '-id')


@store_guard
def paginate_payments(predicate: Optional[Q] = None, *, page: int = 1, limit: Optional[int] = None) -> dict:
    """
    Return one page of payments matching ``predicate``.

    Count and slice are two statements inside one transaction. Whether they
    see the same snapshot depends on the database isolation level: under
    READ COMMITTED (the PostgreSQL default) a concurrent insert can land
    between them, so ``total`` and ``data`` only agree exactly under
    REPEATABLE READ or stricter. Pages past the end return an empty
    ``data`` list.

    Args:
        predicate: Q from build_payment_filter (None means all payments)
        page: 1-based page number
        limit: Page size, 1..PAYMENTS_MAX_PAGE_SIZE (default PAYMENTS_DEFAULT_PAGE_SIZE)

    Returns:
        Dict with keys data, total, page, limit, total_pages

    Raises:
        InvalidPaginationError: If page < 1 or limit is out of range
    """
    if limit is None:
        limit = settings.PAYMENTS_DEFAULT_PAGE_SIZE

    if page < 1:
        raise InvalidPaginationError("page must be at least 1")
    if limit < 1:
        raise InvalidPaginationError("limit must be at least 1")
    if limit > settings.PAYMENTS_MAX_PAGE_SIZE:
        raise InvalidPaginationError(
            f"limit must be at most {settings.PAYMENTS_MAX_PAGE_SIZE}"
        )

    offset = (page - 1) * limit
    with transaction.atomic():
        queryset = filtered_payments(predicate)
        total = queryset.count()
        data = list(queryset[offset:offset + limit])

    return {
        'data': data,
        'total': total,
        'page': page,
        'limit': limit,
        'total_pages': math.ceil(total / limit),
    }
