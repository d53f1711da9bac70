from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'', views.PaymentViewSet, basename='payment')

urlpatterns = [
    # GET    /api/payments/              - List payments (filtered, paginated)
    # POST   /api/payments/              - Record a payment
    # GET    /api/payments/{id}/         - Get payment details
    # PATCH  /api/payments/{id}/status/  - Update payment status
    # GET    /api/payments/export/       - CSV export (same filters as list)
    path('', include(router.urls)),
]
