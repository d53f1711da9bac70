"""Services for payments business logic."""

from apps.payments.exceptions import (
    PaymentServiceError,
    PaymentValidationError,
    InvalidPaymentError,
    InvalidFilterError,
    PaymentNotFoundError,
    InvalidPaginationError,
    InvalidStatusError,
    TransactionIdConflictError,
    StoreUnavailableError,
)
from .store import store_guard
from .payment_management import create_payment, get_payment, update_payment_status
from .filtering import build_payment_filter
from .pagination import filtered_payments, paginate_payments
from .export import CSV_HEADER, export_payments_csv
from .seeding import seed_sample_payments

__all__ = [
    # Exceptions
    'PaymentServiceError',
    'PaymentValidationError',
    'InvalidPaymentError',
    'InvalidFilterError',
    'PaymentNotFoundError',
    'InvalidPaginationError',
    'InvalidStatusError',
    'TransactionIdConflictError',
    'StoreUnavailableError',
    # Services
    'store_guard',
    'create_payment',
    'get_payment',
    'update_payment_status',
    'build_payment_filter',
    'filtered_payments',
    'paginate_payments',
    'CSV_HEADER',
    'export_payments_csv',
    'seed_sample_payments',
]
