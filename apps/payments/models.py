from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import secrets
import string
import time


TRANSACTION_ID_PREFIX = 'TXN'
TRANSACTION_ID_SUFFIX_LENGTH = 5
TRANSACTION_ID_ALPHABET = string.digits + string.ascii_uppercase


def generate_transaction_id():
    """
    Build a server-side transaction id.

    Format: 'TXN' + epoch milliseconds + 5 random [0-9A-Z] characters,
    e.g. 'TXN1718000000000K3Z9Q'.
    """
    millis = int(time.time() * 1000)
    suffix = ''.join(
        secrets.choice(TRANSACTION_ID_ALPHABET)
        for _ in range(TRANSACTION_ID_SUFFIX_LENGTH)
    )
    return f'{TRANSACTION_ID_PREFIX}{millis}{suffix}'


class PaymentStatus(models.TextChoices):
    SUCCESS = 'success', 'Success'
    PENDING = 'pending', 'Pending'
    FAILED = 'failed', 'Failed'


class PaymentMethod(models.TextChoices):
    UPI = 'upi', 'UPI'
    CREDIT_CARD = 'credit_card', 'Credit Card'
    DEBIT_CARD = 'debit_card', 'Debit Card'
    NET_BANKING = 'net_banking', 'Net Banking'
    WALLET = 'wallet', 'Wallet'


class Payment(models.Model):
    """A single payment transaction recorded by the dashboard."""

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    receiver = models.CharField(max_length=255)
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )
    method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices
    )
    description = models.TextField(blank=True)

    transaction_id = models.CharField(
        max_length=32,
        unique=True,
        editable=False,
        default=generate_transaction_id
    )

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='payments_status_created_idx'),
            models.Index(fields=['method', 'created_at'], name='payments_method_created_idx'),
            models.Index(fields=['created_at'], name='payments_created_at_idx'),
        ]

    def __str__(self):
        return f"{self.transaction_id} - {self.amount} to {self.receiver} ({self.status})"
