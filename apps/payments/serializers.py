from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from .models import Payment, PaymentMethod, PaymentStatus


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentFilterSerializer(serializers.Serializer):
    """
    Validate payment filter query parameters.

    Shared by listing, export and the analytics breakdowns.

    Query Parameters:
        status (str): Filter by payment status
        method (str): Filter by payment method
        start_date (date): Created on or after this day
        end_date (date): Created on or before this day (inclusive)
        min_amount (decimal): Inclusive lower amount bound
        max_amount (decimal): Inclusive upper amount bound
        receiver (str): Case-insensitive receiver substring
    """

    status = serializers.ChoiceField(
        choices=PaymentStatus.choices,
        required=False,
        allow_blank=True
    )
    method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        required=False,
        allow_blank=True
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    min_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False
    )
    max_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False
    )
    receiver = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):
        """Validate date and amount ranges."""
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be on or after start date'
            })

        min_amount = attrs.get('min_amount')
        max_amount = attrs.get('max_amount')
        if min_amount is not None and max_amount is not None and min_amount > max_amount:
            raise serializers.ValidationError({
                'max_amount': 'Maximum amount must be greater than or equal to minimum amount'
            })

        return attrs


class PaymentListQuerySerializer(PaymentFilterSerializer):
    """
    Payment filters plus pagination for the list endpoint.

    Query Parameters:
        page (int): 1-based page number
        limit (int): Page size
    """

    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(
        min_value=1,
        max_value=settings.PAYMENTS_MAX_PAGE_SIZE,
        required=False,
        default=settings.PAYMENTS_DEFAULT_PAGE_SIZE
    )


class PaymentCreateSerializer(serializers.Serializer):
    """
    Validate input for recording a payment.

    The transaction id is always generated server side and never accepted
    from the client.
    """

    amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    receiver = serializers.CharField(max_length=255)
    method = serializers.ChoiceField(choices=PaymentMethod.choices)
    status = serializers.ChoiceField(
        choices=PaymentStatus.choices,
        required=False,
        default=PaymentStatus.PENDING
    )
    description = serializers.CharField(required=False, allow_blank=True, default='')


class UpdatePaymentStatusSerializer(serializers.Serializer):
    """Validate input for a status transition."""

    status = serializers.ChoiceField(choices=PaymentStatus.choices)


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentSerializer(serializers.ModelSerializer):
    """Full payment record."""

    class Meta:
        model = Payment
        fields = [
            'id',
            'amount',
            'receiver',
            'status',
            'method',
            'description',
            'transaction_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PaymentListResponseSerializer(serializers.Serializer):
    """Paginated payment listing envelope."""

    data = PaymentSerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total_pages = serializers.IntegerField()
