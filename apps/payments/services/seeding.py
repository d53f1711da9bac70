"""Sample payment data for demos and local development."""

import logging
import random
from datetime import timedelta
from decimal import Decimal
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from apps.payments.models import Payment, PaymentMethod, PaymentStatus, generate_transaction_id

logger = logging.getLogger(__name__)

SAMPLE_PAYMENTS = [
    (Decimal('1500.00'), 'John Doe', PaymentStatus.SUCCESS, PaymentMethod.UPI, 'Payment for services'),
    (Decimal('2500.50'), 'Jane Smith', PaymentStatus.SUCCESS, PaymentMethod.CREDIT_CARD, 'Product purchase'),
    (Decimal('750.00'), 'Mike Johnson', PaymentStatus.FAILED, PaymentMethod.NET_BANKING, 'Subscription payment'),
    (Decimal('3200.00'), 'Sarah Wilson', PaymentStatus.PENDING, PaymentMethod.DEBIT_CARD, 'Invoice payment'),
    (Decimal('890.75'), 'David Brown', PaymentStatus.SUCCESS, PaymentMethod.WALLET, 'Online shopping'),
]
RANDOM_PAYMENT_COUNT = 15
SPREAD_DAYS = 7


@transaction.atomic
def seed_sample_payments(*, now=None, rng: Optional[random.Random] = None) -> List[Payment]:
    """
    Insert the fixed sample payments plus random ones if the table is empty.

    Creation times are spread over the last seven days so trends have data.

    Args:
        now: Reference time (default timezone.now())
        rng: Random source, injectable for deterministic tests

    Returns:
        Created payments (empty when payments already exist)
    """
    if Payment.objects.exists():
        logger.info("Payments already exist, skipping payment seeding")
        return []

    now = now or timezone.now()
    rng = rng or random.Random()

    rows = list(SAMPLE_PAYMENTS)
    for i in range(RANDOM_PAYMENT_COUNT):
        rows.append((
            Decimal(rng.randint(100, 5099)).quantize(Decimal('0.01')),
            f'Customer {i + 6}',
            rng.choice(PaymentStatus.values),
            rng.choice(PaymentMethod.values),
            f'Random payment {i + 1}',
        ))

    created = []
    for amount, receiver, status, method, description in rows:
        created.append(Payment.objects.create(
            amount=amount,
            receiver=receiver,
            status=status,
            method=method,
            description=description,
            transaction_id=generate_transaction_id(),
            created_at=now - timedelta(days=rng.randrange(SPREAD_DAYS)),
        ))

    logger.info("Seeded %d sample payments", len(created))
    return created
