from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Dashboard
    path('stats/', views.payment_stats, name='payment-stats'),
    path('quick-stats/', views.quick_stats, name='quick-stats'),

    # Breakdowns
    path('analytics/revenue-by-method/', views.revenue_by_method, name='revenue-by-method'),
    path('analytics/hourly-distribution/', views.hourly_distribution, name='hourly-distribution'),
    path('analytics/success-rate-trend/', views.success_rate_trend, name='success-rate-trend'),
]
