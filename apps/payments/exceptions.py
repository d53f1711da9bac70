"""
Domain exceptions for payments app.

Service-level errors subclass PaymentServiceError and are translated to
HTTP responses by the views. StoreUnavailableError is an APIException so it
renders as 503 from any view, including analytics.
"""
from rest_framework.exceptions import APIException


class PaymentServiceError(Exception):
    """Base exception for payment service errors."""
    pass


class PaymentValidationError(PaymentServiceError):
    """
    Input rejected with field-level detail.

    Args:
        errors: Mapping of field name to error message
    """

    def __init__(self, errors):
        self.errors = dict(errors)
        super().__init__('; '.join(f'{field}: {msg}' for field, msg in self.errors.items()))


class InvalidPaymentError(PaymentValidationError):
    """Raised when payment create input is invalid."""
    pass


class InvalidFilterError(PaymentValidationError):
    """Raised when a filter field is malformed or outside its allowed values."""
    pass


class PaymentNotFoundError(PaymentServiceError):
    """Raised when a payment id does not resolve to a record."""
    pass


class InvalidPaginationError(PaymentServiceError):
    """Raised when page or limit is out of range."""
    pass


class InvalidStatusError(PaymentServiceError):
    """Raised when a status transition targets an unknown status."""
    pass


class TransactionIdConflictError(PaymentServiceError):
    """Raised when a generated transaction id collides twice in a row."""
    pass


class StoreUnavailableError(APIException):
    """Backing database could not be reached."""
    status_code = 503
    default_detail = 'Payment store is temporarily unavailable. Try again later.'
    default_code = 'store_unavailable'
