"""
Payment record store operations.

Create, lookup and status transition for payment records. Every operation
talks to the database directly; nothing here caches.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction, IntegrityError

from apps.payments.models import (
    Payment,
    PaymentMethod,
    PaymentStatus,
    generate_transaction_id,
)
from apps.payments.exceptions import (
    InvalidPaymentError,
    InvalidStatusError,
    PaymentNotFoundError,
    TransactionIdConflictError,
)
from .store import store_guard

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
MAX_AMOUNT = Decimal('99999999.99')
MAX_RECEIVER_LENGTH = 255


def _clean_amount(amount, errors):
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        errors['amount'] = 'A valid number is required.'
        return None

    if not value.is_finite():
        errors['amount'] = 'A valid number is required.'
    elif value <= 0:
        errors['amount'] = 'Amount must be greater than zero.'
    elif value > MAX_AMOUNT:
        errors['amount'] = f'Amount must not exceed {MAX_AMOUNT}.'
    elif value.as_tuple().exponent < -2 and value != value.quantize(CENT):
        errors['amount'] = 'Amount must have at most 2 decimal places.'
    else:
        return value.quantize(CENT)
    return None


@store_guard
def create_payment(
    *,
    amount,
    receiver: str,
    method: str,
    status: str = PaymentStatus.PENDING,
    description: str = ''
) -> Payment:
    """
    Validate input and insert a new payment with a generated transaction id.

    On a transaction id collision the id is regenerated and the insert is
    retried once.

    Args:
        amount: Positive amount with at most 2 decimal places
        receiver: Non-empty payee name (max 255 chars)
        method: One of PaymentMethod values
        status: One of PaymentStatus values (default pending)
        description: Optional free text

    Returns:
        Created Payment instance

    Raises:
        InvalidPaymentError: If any field is invalid (field-level detail)
        TransactionIdConflictError: If the retry collides as well
    """
    errors = {}
    cleaned_amount = _clean_amount(amount, errors)

    receiver = (receiver or '').strip()
    if not receiver:
        errors['receiver'] = 'Receiver is required.'
    elif len(receiver) > MAX_RECEIVER_LENGTH:
        errors['receiver'] = f'Receiver must be at most {MAX_RECEIVER_LENGTH} characters.'

    if method not in PaymentMethod.values:
        errors['method'] = f'"{method}" is not a valid payment method.'
    if status not in PaymentStatus.values:
        errors['status'] = f'"{status}" is not a valid status.'

    if errors:
        raise InvalidPaymentError(errors)

    max_attempts = 2
    for attempt in range(max_attempts):
        transaction_id = generate_transaction_id()
        try:
            with transaction.atomic():
                payment = Payment.objects.create(
                    amount=cleaned_amount,
                    receiver=receiver,
                    method=method,
                    status=status,
                    description=description or '',
                    transaction_id=transaction_id,
                )
        except IntegrityError:
            logger.warning(
                "Transaction id collision on %s (attempt %d of %d)",
                transaction_id, attempt + 1, max_attempts
            )
            if attempt == max_attempts - 1:
                raise TransactionIdConflictError(
                    "Could not generate a unique transaction id"
                )
            continue

        logger.info(
            "Created payment %s (%s) amount=%s status=%s",
            payment.pk, payment.transaction_id, payment.amount, payment.status
        )
        return payment

    # Should never reach here
    raise TransactionIdConflictError("Could not generate a unique transaction id")


@store_guard
def get_payment(*, payment_id: int) -> Payment:
    """
    Get a payment by id.

    Raises:
        PaymentNotFoundError: If no payment has this id
    """
    try:
        return Payment.objects.get(pk=payment_id)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError(f"Payment with ID {payment_id} not found")


@store_guard
@transaction.atomic
def update_payment_status(*, payment_id: int, status: str) -> Payment:
    """
    Move a payment to a new status.

    Any status may move to any status, including itself. The row is locked
    for the duration of the read-modify-write; concurrent callers are
    serialized and the last write wins.

    Args:
        payment_id: Payment primary key
        status: Target PaymentStatus value

    Returns:
        Updated Payment instance with refreshed updated_at

    Raises:
        PaymentNotFoundError: If no payment has this id
        InvalidStatusError: If status is not a known value (record untouched)
    """
    try:
        payment = Payment.objects.select_for_update().get(pk=payment_id)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError(f"Payment with ID {payment_id} not found")

    if status not in PaymentStatus.values:
        raise InvalidStatusError(f'"{status}" is not a valid status')

    old_status = payment.status
    payment.status = status
    payment.save(update_fields=['status', 'updated_at'])

    logger.info("Payment %s status %s -> %s", payment.pk, old_status, status)
    return payment
