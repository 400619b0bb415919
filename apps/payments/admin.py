from django.contrib import admin
from django.utils.html import format_html

from .models import PaymentTransaction, RefundRecord


@admin.register(PaymentTransaction)
class PaymentTransactionAdmin(admin.ModelAdmin):
    list_display = ['razorpay_order_id', 'user', 'amount', 'status_badge', 'order', 'created_at', 'paid_at']
    list_filter = ['status', 'currency', 'created_at']
    search_fields = ['razorpay_order_id', 'razorpay_payment_id', 'user__email', 'receipt']
    readonly_fields = [
        'razorpay_order_id', 'razorpay_payment_id', 'amount', 'amount_paise', 'currency',
        'receipt', 'notes', 'order', 'paid_at', 'created_at', 'updated_at'
    ]
    fieldsets = (
        ('Gateway', {'fields': ('razorpay_order_id', 'razorpay_payment_id', 'receipt', 'notes')}),
        ('Amount', {'fields': ('amount', 'amount_paise', 'currency')}),
        ('Status', {'fields': ('user', 'status', 'order', 'error_message', 'paid_at')}),
        ('Timestamps', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )

    def status_badge(self, obj):
        colors = {'created': 'orange', 'paid': 'green', 'failed': 'red'}
        return format_html(
            '<span style="color: {};">{}</span>',
            colors.get(obj.status, 'black'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'


@admin.register(RefundRecord)
class RefundRecordAdmin(admin.ModelAdmin):
    list_display = ['return_request', 'order', 'amount', 'method', 'status', 'initiated_at', 'processed_at']
    list_filter = ['status', 'method']
    search_fields = ['reference', 'order__order_number']
    readonly_fields = ['initiated_at', 'processed_at']
