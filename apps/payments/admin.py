from django.contrib import admin
from django.utils import timezone
from .models import Payment, PaymentStatus


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin interface for payment records."""

    list_display = [
        'transaction_id',
        'receiver',
        'amount',
        'status',
        'method',
        'created_at',
    ]

    list_filter = [
        'status',
        'method',
        'created_at',
    ]

    search_fields = [
        'transaction_id',
        'receiver',
        'description',
    ]

    ordering = ['-created_at', '-id']
    date_hierarchy = 'created_at'

    readonly_fields = [
        'transaction_id',
        'created_at',
        'updated_at',
    ]

    fieldsets = (
        ('Payment', {
            'fields': ('amount', 'receiver', 'method', 'description')
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Identifiers & Timestamps', {
            'fields': ('transaction_id', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    actions = ['mark_success', 'mark_failed']

    @admin.action(description='Mark selected payments as successful')
    def mark_success(self, request, queryset):
        count = queryset.update(status=PaymentStatus.SUCCESS, updated_at=timezone.now())
        self.message_user(request, f'Marked {count} payment(s) as successful.')

    @admin.action(description='Mark selected payments as failed')
    def mark_failed(self, request, queryset):
        count = queryset.update(status=PaymentStatus.FAILED, updated_at=timezone.now())
        self.message_user(request, f'Marked {count} payment(s) as failed.')
