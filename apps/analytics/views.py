from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema
from apps.payments.serializers import PaymentFilterSerializer, PaymentSerializer
from apps.payments.services import build_payment_filter, PaymentValidationError
from .analytics import PaymentAnalytics
from .serializers import (
    # Input serializers
    TrendQuerySerializer,
    # Response serializers
    DashboardStatsSerializer,
    QuickStatsSerializer,
    RevenueByMethodSerializer,
    HourlyDistributionSerializer,
    SuccessRatePointSerializer,
    ErrorSerializer,
)
from .exceptions import AnalyticsServiceError


def _filter_from_query(request):
    """Validate optional payment filters in the query string into a predicate."""
    filter_serializer = PaymentFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = dict(filter_serializer.validated_data)
    return build_payment_filter(**params)


@extend_schema(
    parameters=[TrendQuerySerializer],
    responses={
        200: DashboardStatsSerializer,
        400: ErrorSerializer,
    },
    description="Dashboard statistics: counters, revenue trend, breakdowns and recent transactions.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payment_stats(request):
    """Get dashboard statistics - thin HTTP handler."""
    query_serializer = TrendQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        data = PaymentAnalytics.dashboard_stats(
            trend_days=query_serializer.validated_data['days']
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    data['recent_transactions'] = PaymentSerializer(data['recent_transactions'], many=True).data
    return Response(data)


@extend_schema(
    responses={200: QuickStatsSerializer},
    description="Today vs. yesterday counts and revenue, success rate, average and peak hour.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quick_stats(request):
    """Get quick stats - thin HTTP handler."""
    return Response(PaymentAnalytics.quick_stats())


@extend_schema(
    parameters=[PaymentFilterSerializer],
    responses={
        200: RevenueByMethodSerializer(many=True),
        400: ErrorSerializer,
    },
    description="Transactions, successes and revenue per payment method.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def revenue_by_method(request):
    """Get revenue by payment method - thin HTTP handler."""
    try:
        predicate = _filter_from_query(request)
    except PaymentValidationError as e:
        return Response(e.errors, status=status.HTTP_400_BAD_REQUEST)

    return Response(PaymentAnalytics.revenue_by_method(predicate))


@extend_schema(
    parameters=[PaymentFilterSerializer],
    responses={
        200: HourlyDistributionSerializer(many=True),
        400: ErrorSerializer,
    },
    description="Transactions and successful revenue for each hour of the day.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def hourly_distribution(request):
    """Get hour-of-day distribution - thin HTTP handler."""
    try:
        predicate = _filter_from_query(request)
    except PaymentValidationError as e:
        return Response(e.errors, status=status.HTTP_400_BAD_REQUEST)

    return Response(PaymentAnalytics.hourly_distribution(predicate))


@extend_schema(
    parameters=[TrendQuerySerializer],
    responses={
        200: SuccessRatePointSerializer(many=True),
        400: ErrorSerializer,
    },
    description="Daily success rate over the trailing days. Days without transactions report 0.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def success_rate_trend(request):
    """Get success-rate trend - thin HTTP handler."""
    query_serializer = TrendQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        data = PaymentAnalytics.success_rate_trend(
            days=query_serializer.validated_data['days']
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(data)
