"""
Analytics Module
=================

This module provides the aggregation queries behind the payment dashboard.
Every figure is recomputed against the payments table at call time; nothing
is cached.

Classes:
    PaymentAnalytics: Static methods for dashboard statistics and breakdowns.

Key Features:
    - Summary counters (today, trailing week, revenue, failures)
    - Contiguous daily revenue and success-rate trends
    - Method, status and hour-of-day breakdowns
    - Quick stats comparing today with yesterday, with peak hour

Example:
    Building the dashboard payload::

        from apps.analytics.analytics import PaymentAnalytics

        stats = PaymentAnalytics.dashboard_stats(trend_days=7)
        print(f"Revenue: {stats['total_revenue']}")
        for point in stats['revenue_trend']:
            print(f"{point['date']}: {point['revenue']}")

Note:
    Calendar days and hours are taken in the PAYMENTS_REPORTING_TIMEZONE
    setting (UTC by default). Methods that take ``now`` use it as the
    reference instant, which keeps them deterministic under test.
"""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db.models import Avg, Count, DecimalField, Q, Sum
from django.db.models.functions import Coalesce, ExtractHour
from django.utils import timezone

from apps.payments.models import Payment, PaymentMethod, PaymentStatus
from apps.payments.services.periods import day_bounds, local_date, reporting_timezone
from apps.payments.services.store import store_guard
from .exceptions import InvalidLimitError, InvalidWindowError

ZERO = Decimal('0.00')
CENT = Decimal('0.01')
SUCCESS = Q(status=PaymentStatus.SUCCESS)


def _money(value):
    """Quantize a possibly-null amount to cents."""
    if value is None:
        return ZERO
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _rate(part, whole):
    """Percentage with one decimal place, 0.0 when ``whole`` is zero."""
    if not whole:
        return 0.0
    value = Decimal(part) * 100 / Decimal(whole)
    return float(value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def _whole_percentage(part, whole):
    """Integer percentage rounded half up, 0 when ``whole`` is zero."""
    if not whole:
        return 0
    value = Decimal(part) * 100 / Decimal(whole)
    return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _total(**extra):
    """Sum of amounts with room for totals wider than a single amount column."""
    return Sum('amount', output_field=DecimalField(max_digits=20, decimal_places=2), **extra)


def _payments(predicate=None):
    queryset = Payment.objects.all()
    if predicate is not None:
        queryset = queryset.filter(predicate)
    return queryset


def _by_hour(queryset):
    """Group ``queryset`` by local hour of creation, as ``values('hour')``."""
    return (
        queryset
        .annotate(hour=ExtractHour('created_at', tzinfo=reporting_timezone()))
        .order_by()
        .values('hour')
    )


def _window(days, now):
    """Return (first_day, last_day, start, end) for ``days`` trailing days ending today."""
    if days < 1:
        raise InvalidWindowError("days must be at least 1")
    last_day = local_date(now or timezone.now())
    first_day = last_day - timedelta(days=days - 1)
    start, _ = day_bounds(first_day)
    _, end = day_bounds(last_day)
    return first_day, last_day, start, end


class PaymentAnalytics:
    """
    Aggregation queries for the payment dashboard.

    This class provides static methods for calculating dashboard statistics
    from payment records. All methods are read-only and translate database
    connectivity failures into StoreUnavailableError.

    Methods:
        summary_stats: Today/week counts, total revenue, failed count.
        revenue_trend: Daily successful revenue over trailing days.
        method_breakdown: Count, total and share per payment method.
        status_breakdown: Count and amount per status.
        recent_transactions: Most recently created payments.
        quick_stats: Today vs. yesterday, success rate, peak hour.
        revenue_by_method: Transactions, successes and revenue per method.
        hourly_distribution: Transactions and revenue per hour of day.
        success_rate_trend: Daily success rate over trailing days.
        dashboard_stats: Combined payload for the dashboard screen.

    Note:
        Breakdowns always list every enum value in declaration order, with
        zeros where there is no data, so charts get a stable shape.
    """

    @staticmethod
    @store_guard
    def summary_stats(now=None):
        """
        Calculate the headline counters for the dashboard.

        Args:
            now (datetime, optional): Reference instant. Defaults to
                ``timezone.now()``.

        Returns:
            dict: A dictionary containing:
                - today_payments (int): Payments created during the current
                  calendar day.
                - week_payments (int): Payments created in the trailing
                  seven days up to ``now``.
                - total_revenue (Decimal): Sum of successful amounts, all time.
                - failed_transactions (int): Failed payments, all time.
        """
        now = now or timezone.now()
        today_start, tomorrow_start = day_bounds(local_date(now))
        week_start = now - timedelta(days=7)

        totals = Payment.objects.aggregate(
            today_payments=Count(
                'id',
                filter=Q(created_at__gte=today_start, created_at__lt=tomorrow_start)
            ),
            week_payments=Count(
                'id',
                filter=Q(created_at__gte=week_start, created_at__lte=now)
            ),
            total_revenue=Coalesce(_total(filter=SUCCESS), ZERO),
            failed_transactions=Count('id', filter=Q(status=PaymentStatus.FAILED)),
        )

        return {
            'today_payments': totals['today_payments'],
            'week_payments': totals['week_payments'],
            'total_revenue': _money(totals['total_revenue']),
            'failed_transactions': totals['failed_transactions'],
        }

    @staticmethod
    @store_guard
    def revenue_trend(days=7, now=None):
        """
        Get successful revenue per calendar day for chart visualizations.

        Args:
            days (int, optional): Number of trailing days including today.
                Defaults to 7.
            now (datetime, optional): Reference instant.

        Returns:
            list[dict]: Exactly ``days`` entries, oldest first, each with:
                - date (str): ISO date, e.g. '2025-01-31'.
                - revenue (Decimal): Successful revenue that day (0.00 if none).

        Raises:
            InvalidWindowError: If ``days`` is less than 1.

        Example:
            Last week of revenue::

                for point in PaymentAnalytics.revenue_trend(days=7):
                    print(f"{point['date']}: {point['revenue']}")
                # Output:
                # 2025-01-25: 0.00
                # 2025-01-26: 1500.00
                # ...
        """
        first_day, _, start, end = _window(days, now)

        revenue = {first_day + timedelta(days=i): ZERO for i in range(days)}
        rows = Payment.objects.filter(
            SUCCESS,
            created_at__gte=start,
            created_at__lt=end
        ).values_list('created_at', 'amount')

        for created_at, amount in rows:
            day = local_date(created_at)
            if day in revenue:
                revenue[day] += amount

        return [
            {'date': day.isoformat(), 'revenue': _money(total)}
            for day, total in revenue.items()
        ]

    @staticmethod
    @store_guard
    def method_breakdown(predicate=None):
        """
        Group payments by method.

        Args:
            predicate (Q, optional): Filter from build_payment_filter.

        Returns:
            list[dict]: One entry per payment method, each with:
                - method (str)
                - count (int)
                - total (Decimal): Sum of amounts, any status.
                - percentage (int): count / all * 100, rounded half up.

        Note:
            Percentages are rounded independently and need not sum to 100.
        """
        rows = (
            _payments(predicate)
            .order_by()
            .values('method')
            .annotate(count=Count('id'), total=_total())
        )
        by_method = {row['method']: row for row in rows}
        overall = sum(row['count'] for row in by_method.values())

        breakdown = []
        for method in PaymentMethod.values:
            row = by_method.get(method, {})
            count = row.get('count', 0)
            breakdown.append({
                'method': method,
                'count': count,
                'total': _money(row.get('total')),
                'percentage': _whole_percentage(count, overall),
            })
        return breakdown

    @staticmethod
    @store_guard
    def status_breakdown(predicate=None):
        """
        Group payments by status.

        Returns:
            list[dict]: One entry per status with ``status``, ``count`` and
            ``amount`` (sum of amounts).
        """
        rows = (
            _payments(predicate)
            .order_by()
            .values('status')
            .annotate(count=Count('id'), amount=_total())
        )
        by_status = {row['status']: row for row in rows}

        return [
            {
                'status': status,
                'count': by_status.get(status, {}).get('count', 0),
                'amount': _money(by_status.get(status, {}).get('amount')),
            }
            for status in PaymentStatus.values
        ]

    @staticmethod
    @store_guard
    def recent_transactions(limit=None):
        """
        Get the most recently created payments, any status.

        Args:
            limit (int, optional): Number of payments. Defaults to
                PAYMENTS_RECENT_LIMIT.

        Returns:
            list[Payment]: Newest first, ties broken by id.

        Raises:
            InvalidLimitError: If ``limit`` is less than 1.
        """
        if limit is None:
            limit = settings.PAYMENTS_RECENT_LIMIT
        if limit < 1:
            raise InvalidLimitError("limit must be at least 1")

        return list(Payment.objects.order_by('-created_at', '-id')[:limit])

    @staticmethod
    @store_guard
    def quick_stats(now=None):
        """
        Compare today with yesterday and summarise success.

        Args:
            now (datetime, optional): Reference instant.

        Returns:
            dict: A dictionary containing:
                - today_transactions (int): Payments created today, any status.
                - yesterday_transactions (int): Same for yesterday.
                - today_revenue (Decimal): Successful revenue today.
                - yesterday_revenue (Decimal): Successful revenue yesterday.
                - success_rate (float): Successful / all * 100, one decimal.
                - average_transaction (Decimal): Mean successful amount.
                - peak_hour (int | None): Hour 0-23 with the most successful
                  payments.

        Note:
            On an empty table success_rate is 0.0 and peak_hour is None.
            When several hours tie for the peak, the earliest hour wins.
        """
        now = now or timezone.now()
        today_start, tomorrow_start = day_bounds(local_date(now))
        yesterday_start, _ = day_bounds(local_date(now) - timedelta(days=1))
        today = Q(created_at__gte=today_start, created_at__lt=tomorrow_start)
        yesterday = Q(created_at__gte=yesterday_start, created_at__lt=today_start)

        totals = Payment.objects.aggregate(
            today_transactions=Count('id', filter=today),
            yesterday_transactions=Count('id', filter=yesterday),
            today_revenue=Coalesce(_total(filter=SUCCESS & today), ZERO),
            yesterday_revenue=Coalesce(_total(filter=SUCCESS & yesterday), ZERO),
            total=Count('id'),
            successful=Count('id', filter=SUCCESS),
            average=Avg('amount', filter=SUCCESS),
        )

        peak = (
            _by_hour(Payment.objects.filter(SUCCESS))
            .annotate(successful=Count('id'))
            .order_by('-successful', 'hour')
            .first()
        )
        peak_hour = peak['hour'] if peak else None

        return {
            'today_transactions': totals['today_transactions'],
            'yesterday_transactions': totals['yesterday_transactions'],
            'today_revenue': _money(totals['today_revenue']),
            'yesterday_revenue': _money(totals['yesterday_revenue']),
            'success_rate': _rate(totals['successful'], totals['total']),
            'average_transaction': _money(totals['average']),
            'peak_hour': peak_hour,
        }

    @staticmethod
    @store_guard
    def revenue_by_method(predicate=None):
        """
        Transactions, successes and revenue per payment method.

        Returns:
            list[dict]: One entry per method with ``method``,
            ``transactions``, ``successful``, ``revenue`` (successful only)
            and ``success_rate`` (one decimal, 0.0 without transactions).
        """
        rows = (
            _payments(predicate)
            .order_by()
            .values('method')
            .annotate(
                transactions=Count('id'),
                successful=Count('id', filter=SUCCESS),
                revenue=_total(filter=SUCCESS),
            )
        )
        by_method = {row['method']: row for row in rows}

        result = []
        for method in PaymentMethod.values:
            row = by_method.get(method, {})
            transactions = row.get('transactions', 0)
            successful = row.get('successful', 0)
            result.append({
                'method': method,
                'transactions': transactions,
                'successful': successful,
                'revenue': _money(row.get('revenue')),
                'success_rate': _rate(successful, transactions),
            })
        return result

    @staticmethod
    @store_guard
    def hourly_distribution(predicate=None):
        """
        Transactions and revenue per hour of day.

        Returns:
            list[dict]: 24 entries (hour 0..23) with ``hour``,
            ``transactions``, ``successful`` and ``revenue``.
        """
        buckets = [
            {'hour': hour, 'transactions': 0, 'successful': 0, 'revenue': ZERO}
            for hour in range(24)
        ]

        rows = _by_hour(_payments(predicate)).annotate(
            transactions=Count('id'),
            successful=Count('id', filter=SUCCESS),
            revenue=_total(filter=SUCCESS),
        )
        for row in rows:
            bucket = buckets[row['hour']]
            bucket['transactions'] = row['transactions']
            bucket['successful'] = row['successful']
            bucket['revenue'] = _money(row['revenue'])
        return buckets

    @staticmethod
    @store_guard
    def success_rate_trend(days=7, now=None):
        """
        Daily success rate over trailing days.

        Args:
            days (int, optional): Number of trailing days including today.
                Defaults to 7.
            now (datetime, optional): Reference instant.

        Returns:
            list[dict]: Exactly ``days`` entries, oldest first, each with
            ``date``, ``transactions``, ``successful`` and ``success_rate``.

        Raises:
            InvalidWindowError: If ``days`` is less than 1.

        Note:
            A day without transactions reports success_rate 0.0.
        """
        first_day, _, start, end = _window(days, now)

        series = {
            first_day + timedelta(days=i): {'transactions': 0, 'successful': 0}
            for i in range(days)
        }
        rows = Payment.objects.filter(
            created_at__gte=start,
            created_at__lt=end
        ).values_list('created_at', 'status')

        for created_at, status in rows:
            point = series.get(local_date(created_at))
            if point is None:
                continue
            point['transactions'] += 1
            if status == PaymentStatus.SUCCESS:
                point['successful'] += 1

        return [
            {
                'date': day.isoformat(),
                'transactions': point['transactions'],
                'successful': point['successful'],
                'success_rate': _rate(point['successful'], point['transactions']),
            }
            for day, point in series.items()
        ]

    @staticmethod
    @store_guard
    def dashboard_stats(now=None, trend_days=7, recent_limit=None):
        """
        Build the combined dashboard payload.

        Returns:
            dict: summary_stats fields plus ``revenue_trend``,
            ``method_breakdown``, ``status_breakdown`` and
            ``recent_transactions`` (list of Payment).

        Raises:
            InvalidWindowError: If ``trend_days`` is less than 1.
            InvalidLimitError: If ``recent_limit`` is less than 1.
        """
        now = now or timezone.now()

        stats = PaymentAnalytics.summary_stats(now=now)
        stats['revenue_trend'] = PaymentAnalytics.revenue_trend(days=trend_days, now=now)
        stats['method_breakdown'] = PaymentAnalytics.method_breakdown()
        stats['status_breakdown'] = PaymentAnalytics.status_breakdown()
        stats['recent_transactions'] = PaymentAnalytics.recent_transactions(limit=recent_limit)
        return stats
