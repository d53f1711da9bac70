import pytest
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.payments.models import Payment, PaymentMethod, PaymentStatus, generate_transaction_id


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a dashboard user."""
    return User.objects.create_user(
        username='operator',
        password='TestPass123!',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def make_payment(db):
    """
    Factory for payments with an explicit creation time.

    Usage: make_payment(amount='10.00', status='success', created_at=...)
    """
    def _make(
        amount='100.00',
        receiver='Test Receiver',
        status=PaymentStatus.SUCCESS,
        method=PaymentMethod.UPI,
        description='',
        created_at=None,
    ):
        return Payment.objects.create(
            amount=Decimal(str(amount)),
            receiver=receiver,
            status=status,
            method=method,
            description=description,
            transaction_id=generate_transaction_id(),
            created_at=created_at or timezone.now(),
        )
    return _make


@pytest.fixture
def fifteen_payments(make_payment):
    """Fifteen payments one minute apart, newest last."""
    base = timezone.now() - timedelta(hours=1)
    return [
        make_payment(amount=f'{i + 1}.00', created_at=base + timedelta(minutes=i))
        for i in range(15)
    ]


@pytest.fixture
def mixed_payments(make_payment):
    """Payments covering every status and several methods and days."""
    day = datetime(2024, 3, 10, 12, 0, tzinfo=dt_timezone.utc)
    return [
        make_payment(amount='100.00', status=PaymentStatus.SUCCESS, method=PaymentMethod.UPI,
                     receiver='John Doe', created_at=day),
        make_payment(amount='250.50', status=PaymentStatus.SUCCESS, method=PaymentMethod.CREDIT_CARD,
                     receiver='Jane Smith', created_at=day + timedelta(days=1)),
        make_payment(amount='75.00', status=PaymentStatus.FAILED, method=PaymentMethod.NET_BANKING,
                     receiver='Mike Johnson', created_at=day + timedelta(days=2)),
        make_payment(amount='320.00', status=PaymentStatus.PENDING, method=PaymentMethod.DEBIT_CARD,
                     receiver='Sarah Wilson', created_at=day + timedelta(days=3)),
        make_payment(amount='89.75', status=PaymentStatus.SUCCESS, method=PaymentMethod.WALLET,
                     receiver='David Brown', created_at=day + timedelta(days=4)),
        make_payment(amount='10.00', status=PaymentStatus.FAILED, method=PaymentMethod.UPI,
                     receiver='johnny walker', created_at=day + timedelta(days=4, hours=1)),
    ]
