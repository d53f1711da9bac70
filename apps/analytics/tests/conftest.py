import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.payments.models import Payment, PaymentMethod, PaymentStatus, generate_transaction_id


# Saturday afternoon, UTC
NOW = datetime(2024, 6, 15, 14, 30, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    """Fixed reference instant for analytics queries."""
    return NOW


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a dashboard user."""
    return User.objects.create_user(
        username='analyst',
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
    """Factory for payments with an explicit creation time."""
    def _make(
        amount='100.00',
        status=PaymentStatus.SUCCESS,
        method=PaymentMethod.UPI,
        receiver='Test Receiver',
        created_at=None,
    ):
        return Payment.objects.create(
            amount=Decimal(str(amount)),
            receiver=receiver,
            status=status,
            method=method,
            transaction_id=generate_transaction_id(),
            created_at=created_at or timezone.now(),
        )
    return _make
