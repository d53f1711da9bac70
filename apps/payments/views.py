from django.http import HttpResponse
from django.utils import timezone
from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiResponse
from .models import Payment
from .serializers import (
    PaymentSerializer,
    PaymentListResponseSerializer,
    # Input serializers
    PaymentFilterSerializer,
    PaymentListQuerySerializer,
    PaymentCreateSerializer,
    UpdatePaymentStatusSerializer,
)
from .services import (
    build_payment_filter,
    create_payment,
    export_payments_csv,
    get_payment,
    paginate_payments,
    update_payment_status,
    PaymentValidationError,
    PaymentNotFoundError,
    InvalidPaginationError,
    InvalidStatusError,
    TransactionIdConflictError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class PaymentViewSet(viewsets.GenericViewSet):
    """
    ViewSet for payment records.

    list: Filtered, paginated payments ({data, total, page, limit, total_pages})
    create: Record a new payment
    retrieve: Get a specific payment
    export: Filtered payments as CSV
    update_status: Move a payment to another status
    """

    queryset = Payment.objects.all()
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    def _validated_filter(self, request, serializer_class=PaymentFilterSerializer):
        """Validate query params into the shared filter predicate and leftover params."""
        filter_serializer = serializer_class(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = dict(filter_serializer.validated_data)

        pagination = {key: params.pop(key) for key in ('page', 'limit') if key in params}
        return build_payment_filter(**params), pagination

    @extend_schema(
        parameters=[PaymentListQuerySerializer],
        responses={
            200: PaymentListResponseSerializer,
            400: ErrorResponseSerializer,
        },
        description="List payments matching the filters, newest first.",
        tags=['payments'],
    )
    def list(self, request):
        try:
            predicate, pagination = self._validated_filter(request, PaymentListQuerySerializer)
            result = paginate_payments(predicate, **pagination)
        except PaymentValidationError as e:
            return Response(e.errors, status=status.HTTP_400_BAD_REQUEST)
        except InvalidPaginationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        result['data'] = PaymentSerializer(result['data'], many=True).data
        return Response(result)

    @extend_schema(
        request=PaymentCreateSerializer,
        responses={
            201: PaymentSerializer,
            400: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Record a payment. The transaction id is generated by the server.",
        tags=['payments'],
    )
    def create(self, request):
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = create_payment(**serializer.validated_data)
        except PaymentValidationError as e:
            return Response(e.errors, status=status.HTTP_400_BAD_REQUEST)
        except TransactionIdConflictError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={
            200: PaymentSerializer,
            404: ErrorResponseSerializer,
        },
        description="Get a single payment by id.",
        tags=['payments'],
    )
    def retrieve(self, request, pk=None):
        try:
            payment = get_payment(payment_id=int(pk))
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(PaymentSerializer(payment).data)

    @extend_schema(
        parameters=[PaymentFilterSerializer],
        responses={
            (200, 'text/csv'): OpenApiResponse(description='CSV file of matching payments'),
            400: ErrorResponseSerializer,
        },
        description="Export payments matching the filters as CSV.",
        tags=['payments'],
    )
    @action(detail=False, methods=['get'])
    def export(self, request):
        """
        Export filtered payments as a CSV attachment.

        GET /api/payments/export/
        """
        try:
            predicate, _ = self._validated_filter(request)
        except PaymentValidationError as e:
            return Response(e.errors, status=status.HTTP_400_BAD_REQUEST)

        content = export_payments_csv(predicate)
        filename = f"payments-{timezone.now():%Y-%m-%d}.csv"

        response = HttpResponse(content, content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response

    @extend_schema(
        request=UpdatePaymentStatusSerializer,
        responses={
            200: PaymentSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        description="Move a payment to another status.",
        tags=['payments'],
    )
    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        """
        Update payment status.

        PATCH /api/payments/{id}/status/
        Body: {"status": "success" | "pending" | "failed"}
        """
        # A missing record is reported before an invalid body
        try:
            get_payment(payment_id=int(pk))
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        input_serializer = UpdatePaymentStatusSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            payment = update_payment_status(
                payment_id=int(pk),
                status=input_serializer.validated_data['status']
            )
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidStatusError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentSerializer(payment).data)
