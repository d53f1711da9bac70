"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    TrendQuerySerializer - Validates the trailing-days window

Response Serializers:
    DashboardStatsSerializer - /stats payload
    QuickStatsSerializer - Today vs. yesterday summary
    RevenueByMethodSerializer - Per-method revenue and success
    HourlyDistributionSerializer - Per-hour transactions and revenue
    SuccessRatePointSerializer - One day of the success-rate trend
"""

from rest_framework import serializers

from apps.payments.serializers import PaymentSerializer


def _money():
    return serializers.DecimalField(max_digits=20, decimal_places=2, coerce_to_string=False)


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class TrendQuerySerializer(serializers.Serializer):
    """
    Validate the trailing-days window for trends.

    Used by: payment_stats, success_rate_trend

    Query Parameters:
        days (int): Number of trailing days including today (1-365)
    """

    days = serializers.IntegerField(
        min_value=1,
        max_value=365,
        required=False,
        default=7,
        help_text='Number of trailing days including today (1-365)'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class RevenuePointSerializer(serializers.Serializer):
    """Nested serializer for one day of revenue."""
    date = serializers.DateField()
    revenue = _money()


class MethodBreakdownSerializer(serializers.Serializer):
    """Nested serializer for one payment method."""
    method = serializers.CharField()
    count = serializers.IntegerField()
    total = _money()
    percentage = serializers.IntegerField()


class StatusBreakdownSerializer(serializers.Serializer):
    """Nested serializer for one payment status."""
    status = serializers.CharField()
    count = serializers.IntegerField()
    amount = _money()


class DashboardStatsSerializer(serializers.Serializer):
    """Response serializer for the dashboard statistics."""
    today_payments = serializers.IntegerField()
    week_payments = serializers.IntegerField()
    total_revenue = _money()
    failed_transactions = serializers.IntegerField()
    revenue_trend = RevenuePointSerializer(many=True)
    method_breakdown = MethodBreakdownSerializer(many=True)
    status_breakdown = StatusBreakdownSerializer(many=True)
    recent_transactions = PaymentSerializer(many=True)


class QuickStatsSerializer(serializers.Serializer):
    """Response serializer for quick stats."""
    today_transactions = serializers.IntegerField()
    yesterday_transactions = serializers.IntegerField()
    today_revenue = _money()
    yesterday_revenue = _money()
    success_rate = serializers.FloatField()
    average_transaction = _money()
    peak_hour = serializers.IntegerField(allow_null=True)


class RevenueByMethodSerializer(serializers.Serializer):
    """Response serializer for one method's revenue figures."""
    method = serializers.CharField()
    transactions = serializers.IntegerField()
    successful = serializers.IntegerField()
    revenue = _money()
    success_rate = serializers.FloatField()


class HourlyDistributionSerializer(serializers.Serializer):
    """Response serializer for one hour of the day."""
    hour = serializers.IntegerField()
    transactions = serializers.IntegerField()
    successful = serializers.IntegerField()
    revenue = _money()


class SuccessRatePointSerializer(serializers.Serializer):
    """Response serializer for one day of the success-rate trend."""
    date = serializers.DateField()
    transactions = serializers.IntegerField()
    successful = serializers.IntegerField()
    success_rate = serializers.FloatField()


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
