"""
Filter evaluator.

Turns optional filter fields into a single Django Q predicate shared by
listing, export and aggregation.
"""

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation

from django.db.models import Q

from apps.payments.models import PaymentMethod, PaymentStatus
from apps.payments.exceptions import InvalidFilterError
from .periods import day_start


def _is_absent(value):
    return value is None or value == ''


def _parse_date(value, field, errors):
    if _is_absent(value):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        errors[field] = 'Date has wrong format. Use YYYY-MM-DD.'
        return None


def _parse_amount(value, field, errors):
    if _is_absent(value):
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        errors[field] = 'A valid number is required.'
        return None
    if not amount.is_finite():
        errors[field] = 'A valid number is required.'
        return None
    return amount


def build_payment_filter(
    *,
    status=None,
    method=None,
    start_date=None,
    end_date=None,
    min_amount=None,
    max_amount=None,
    receiver=None
) -> Q:
    """
    Build a predicate over payments from optional filter fields.

    Absent fields impose no constraint. Date bounds are whole calendar days
    in the reporting timezone: start_date is inclusive from local midnight,
    end_date is inclusive through the end of that day.

    Args:
        status: PaymentStatus value
        method: PaymentMethod value
        start_date: date or 'YYYY-MM-DD'
        end_date: date or 'YYYY-MM-DD'
        min_amount: Inclusive lower amount bound
        max_amount: Inclusive upper amount bound
        receiver: Case-insensitive substring of the receiver name

    Returns:
        Q predicate (empty Q when nothing is set)

    Raises:
        InvalidFilterError: If any field is malformed, out of its enum, or a
            range is inverted
    """
    errors = {}
    predicate = Q()

    if not _is_absent(status):
        if status in PaymentStatus.values:
            predicate &= Q(status=status)
        else:
            errors['status'] = f'"{status}" is not a valid status.'

    if not _is_absent(method):
        if method in PaymentMethod.values:
            predicate &= Q(method=method)
        else:
            errors['method'] = f'"{method}" is not a valid payment method.'

    start = _parse_date(start_date, 'start_date', errors)
    end = _parse_date(end_date, 'end_date', errors)
    if start and end and start > end:
        errors['end_date'] = 'End date must be on or after start date.'
    else:
        if start:
            predicate &= Q(created_at__gte=day_start(start))
        if end:
            predicate &= Q(created_at__lt=day_start(end + timedelta(days=1)))

    low = _parse_amount(min_amount, 'min_amount', errors)
    high = _parse_amount(max_amount, 'max_amount', errors)
    if low is not None and high is not None and low > high:
        errors['max_amount'] = 'Maximum amount must be greater than or equal to minimum amount.'
    else:
        if low is not None:
            predicate &= Q(amount__gte=low)
        if high is not None:
            predicate &= Q(amount__lte=high)

    if not _is_absent(receiver):
        predicate &= Q(receiver__icontains=receiver)

    if errors:
        raise InvalidFilterError(errors)

    return predicate
