import pytest
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch
from django.db import OperationalError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.payments.models import Payment, PaymentMethod, PaymentStatus


@pytest.mark.django_db
class TestAuthRequired:

    @pytest.mark.parametrize('name', [
        'analytics:payment-stats',
        'analytics:quick-stats',
        'analytics:revenue-by-method',
        'analytics:hourly-distribution',
        'analytics:success-rate-trend',
    ])
    def test_unauthenticated(self, api_client, name):
        response = api_client.get(reverse(name))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestPaymentStats:
    """Tests for GET /api/payments/stats/"""

    def test_url(self):
        assert reverse('analytics:payment-stats') == '/api/payments/stats/'

    def test_empty_store(self, authenticated_client):
        response = authenticated_client.get(reverse('analytics:payment-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['today_payments'] == 0
        assert response.data['total_revenue'] == Decimal('0.00')
        assert len(response.data['revenue_trend']) == 7
        assert response.data['recent_transactions'] == []

    def test_with_data(self, authenticated_client, make_payment):
        payment = make_payment(amount='1500.00')
        make_payment(amount='75.00', status=PaymentStatus.FAILED, method=PaymentMethod.WALLET)

        response = authenticated_client.get(reverse('analytics:payment-stats'), {'days': 3})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['today_payments'] == 2
        assert response.data['total_revenue'] == Decimal('1500.00')
        assert response.data['failed_transactions'] == 1
        assert len(response.data['revenue_trend']) == 3
        assert response.data['revenue_trend'][-1]['revenue'] == Decimal('1500.00')
        assert response.data['recent_transactions'][-1]['transaction_id'] == payment.transaction_id

    def test_json_uses_numbers(self, authenticated_client, make_payment):
        make_payment(amount='12.50')

        body = authenticated_client.get(reverse('analytics:payment-stats')).json()

        assert body['total_revenue'] == 12.5
        assert body['status_breakdown'][0] == {'status': 'success', 'count': 1, 'amount': 12.5}

    def test_invalid_days(self, authenticated_client):
        response = authenticated_client.get(reverse('analytics:payment-stats'), {'days': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'days' in response.data

    def test_store_unavailable(self, authenticated_client):
        with patch.object(Payment.objects, 'get_queryset', side_effect=OperationalError('down')):
            response = authenticated_client.get(reverse('analytics:payment-stats'))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


@pytest.mark.django_db
class TestQuickStats:
    """Tests for GET /api/payments/quick-stats/"""

    def test_empty_store_success_rate_is_zero(self, authenticated_client):
        response = authenticated_client.get(reverse('analytics:quick-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success_rate'] == 0
        assert response.data['peak_hour'] is None

    def test_today_counts(self, authenticated_client, make_payment):
        make_payment(amount='40.00')
        make_payment(amount='60.00', status=PaymentStatus.PENDING)

        response = authenticated_client.get(reverse('analytics:quick-stats'))

        assert response.data['today_transactions'] == 2
        assert response.data['today_revenue'] == Decimal('40.00')
        assert response.data['success_rate'] == 50.0


@pytest.mark.django_db
class TestBreakdownEndpoints:

    def test_revenue_by_method(self, authenticated_client, make_payment):
        make_payment(amount='10.00', method=PaymentMethod.UPI)
        make_payment(amount='20.00', method=PaymentMethod.UPI, status=PaymentStatus.FAILED)

        response = authenticated_client.get(reverse('analytics:revenue-by-method'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 5
        assert response.data[0]['method'] == 'upi'
        assert response.data[0]['transactions'] == 2
        assert response.data[0]['revenue'] == Decimal('10.00')

    def test_revenue_by_method_filtered(self, authenticated_client, make_payment):
        make_payment(method=PaymentMethod.UPI)
        make_payment(method=PaymentMethod.UPI, status=PaymentStatus.FAILED)

        response = authenticated_client.get(
            reverse('analytics:revenue-by-method'), {'status': 'failed'}
        )

        assert response.data[0]['transactions'] == 1
        assert response.data[0]['successful'] == 0

    def test_revenue_by_method_invalid_filter(self, authenticated_client):
        response = authenticated_client.get(
            reverse('analytics:revenue-by-method'), {'method': 'cash'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_hourly_distribution_ignores_pagination_params(self, authenticated_client, make_payment):
        make_payment()

        response = authenticated_client.get(
            reverse('analytics:hourly-distribution'), {'limit': '500'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert sum(h['transactions'] for h in response.data) == 1

    def test_hourly_distribution(self, authenticated_client, make_payment):
        make_payment()

        response = authenticated_client.get(reverse('analytics:hourly-distribution'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 24
        assert sum(h['transactions'] for h in response.data) == 1

    def test_success_rate_trend(self, authenticated_client, make_payment):
        make_payment(created_at=timezone.now() - timedelta(days=1))

        response = authenticated_client.get(reverse('analytics:success-rate-trend'), {'days': 3})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 3
        assert response.data[0]['success_rate'] == 0.0
        assert response.data[1]['success_rate'] == 100.0

    def test_success_rate_trend_invalid_days(self, authenticated_client):
        response = authenticated_client.get(reverse('analytics:success-rate-trend'), {'days': 400})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
