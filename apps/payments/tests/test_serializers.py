import pytest
from decimal import Decimal
from datetime import date
from rest_framework.exceptions import ValidationError
from apps.payments.serializers import (
    PaymentFilterSerializer,
    PaymentListQuerySerializer,
    PaymentCreateSerializer,
    UpdatePaymentStatusSerializer,
)
from apps.payments.models import PaymentMethod, PaymentStatus


# =============================================================================
# PaymentFilterSerializer Tests
# =============================================================================

class TestPaymentFilterSerializer:
    """Tests for PaymentFilterSerializer input validation."""

    def test_empty_params(self):
        """No params means no filters."""
        serializer = PaymentFilterSerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data == {}

    def test_pagination_params_ignored(self):
        """page and limit are not filter fields, whatever their value."""
        serializer = PaymentFilterSerializer(data={'page': '0', 'limit': '500'})

        assert serializer.is_valid()
        assert 'limit' not in serializer.validated_data

    def test_full_filter(self):
        """All filter fields are parsed into native types."""
        data = {
            'status': 'success',
            'method': 'upi',
            'start_date': '2024-01-01',
            'end_date': '2024-01-31',
            'min_amount': '10',
            'max_amount': '500.50',
            'receiver': 'john',
        }
        serializer = PaymentFilterSerializer(data=data)

        assert serializer.is_valid()
        params = serializer.validated_data
        assert params['status'] == PaymentStatus.SUCCESS
        assert params['start_date'] == date(2024, 1, 1)
        assert params['max_amount'] == Decimal('500.50')
        assert params['receiver'] == 'john'

    def test_invalid_status(self):
        """Unknown status is rejected."""
        serializer = PaymentFilterSerializer(data={'status': 'refunded'})

        assert not serializer.is_valid()
        assert 'status' in serializer.errors

    def test_invalid_method(self):
        """Unknown method is rejected."""
        serializer = PaymentFilterSerializer(data={'method': 'cash'})

        assert not serializer.is_valid()
        assert 'method' in serializer.errors

    def test_invalid_date_format(self):
        """Dates must be ISO formatted."""
        serializer = PaymentFilterSerializer(data={'start_date': '01/02/2024'})

        assert not serializer.is_valid()
        assert 'start_date' in serializer.errors

    def test_start_after_end(self):
        """Start date after end date is rejected."""
        data = {'start_date': '2024-02-01', 'end_date': '2024-01-01'}
        serializer = PaymentFilterSerializer(data=data)

        assert not serializer.is_valid()
        assert 'end_date' in serializer.errors

    def test_same_start_and_end(self):
        """A single-day range is valid."""
        data = {'start_date': '2024-01-01', 'end_date': '2024-01-01'}

        assert PaymentFilterSerializer(data=data).is_valid()

    def test_min_above_max(self):
        """Inverted amount range is rejected."""
        data = {'min_amount': '100', 'max_amount': '10'}
        serializer = PaymentFilterSerializer(data=data)

        assert not serializer.is_valid()
        assert 'max_amount' in serializer.errors


class TestPaymentListQuerySerializer:
    """Tests for PaymentListQuerySerializer pagination params."""

    def test_defaults(self):
        """No params gives page 1 and the default page size."""
        serializer = PaymentListQuerySerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data == {'page': 1, 'limit': 10}

    def test_filters_and_pagination(self):
        """Filter fields are validated alongside page and limit."""
        serializer = PaymentListQuerySerializer(data={'status': 'failed', 'page': '2', 'limit': '25'})

        assert serializer.is_valid()
        assert serializer.validated_data == {'status': 'failed', 'page': 2, 'limit': 25}

    @pytest.mark.parametrize('page, limit', [('0', '10'), ('1', '0'), ('1', '101'), ('x', '10')])
    def test_pagination_bounds(self, page, limit):
        """Page must be >= 1 and limit within 1..100."""
        serializer = PaymentListQuerySerializer(data={'page': page, 'limit': limit})

        with pytest.raises(ValidationError):
            serializer.is_valid(raise_exception=True)


# =============================================================================
# PaymentCreateSerializer Tests
# =============================================================================

class TestPaymentCreateSerializer:
    """Tests for PaymentCreateSerializer input validation."""

    def test_valid_minimal(self):
        """Status defaults to pending and description to blank."""
        data = {'amount': '99.90', 'receiver': 'John', 'method': 'wallet'}
        serializer = PaymentCreateSerializer(data=data)

        assert serializer.is_valid()
        assert serializer.validated_data['amount'] == Decimal('99.90')
        assert serializer.validated_data['status'] == PaymentStatus.PENDING
        assert serializer.validated_data['description'] == ''
        assert serializer.validated_data['method'] == PaymentMethod.WALLET

    @pytest.mark.parametrize('amount', ['0', '0.00', '-1', '1.234', 'abc'])
    def test_invalid_amount(self, amount):
        """Amount must be positive with at most 2 decimal places."""
        data = {'amount': amount, 'receiver': 'John', 'method': 'upi'}
        serializer = PaymentCreateSerializer(data=data)

        assert not serializer.is_valid()
        assert 'amount' in serializer.errors

    def test_missing_fields(self):
        """Amount, receiver and method are required."""
        serializer = PaymentCreateSerializer(data={})

        assert not serializer.is_valid()
        assert {'amount', 'receiver', 'method'} <= set(serializer.errors)

    def test_transaction_id_is_ignored(self):
        """Client-supplied transaction ids never reach validated data."""
        data = {
            'amount': '10.00',
            'receiver': 'John',
            'method': 'upi',
            'transaction_id': 'TXNCLIENT',
        }
        serializer = PaymentCreateSerializer(data=data)

        assert serializer.is_valid()
        assert 'transaction_id' not in serializer.validated_data


class TestUpdatePaymentStatusSerializer:
    """Tests for UpdatePaymentStatusSerializer input validation."""

    def test_valid(self):
        serializer = UpdatePaymentStatusSerializer(data={'status': 'failed'})

        assert serializer.is_valid()

    def test_unknown_status(self):
        serializer = UpdatePaymentStatusSerializer(data={'status': 'refunded'})

        assert not serializer.is_valid()
        assert 'status' in serializer.errors

    def test_missing_status(self):
        serializer = UpdatePaymentStatusSerializer(data={})

        assert not serializer.is_valid()
