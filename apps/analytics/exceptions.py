"""
Domain exceptions for analytics app.

This module defines domain-specific exceptions that are raised by the
payment analytics layer. These exceptions represent invalid arguments,
separate from HTTP concerns. Store outages are not analytics errors; they
surface as apps.payments.exceptions.StoreUnavailableError.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidWindowError
    └── InvalidLimitError

Usage:
    from apps.analytics.exceptions import InvalidWindowError

    if days < 1:
        raise InvalidWindowError("days must be at least 1")
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    All domain-specific exceptions in the analytics app inherit from this
    class, making it easy to catch all analytics errors in views:

        try:
            data = PaymentAnalytics.revenue_trend(days=0)
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidWindowError(AnalyticsServiceError):
    """
    Raised when a trailing-day window is out of range.

    Example:
        raise InvalidWindowError("days must be at least 1")
    """

    pass


class InvalidLimitError(AnalyticsServiceError):
    """
    Raised when a result limit is out of range.

    Example:
        raise InvalidLimitError("limit must be at least 1")
    """

    pass
