from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['product', 'variant', 'seller', 'product_name', 'quantity', 'unit_price', 'total_price']
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Read-mostly order admin; status changes go through the API guard table"""
    list_display = ['order_number', 'buyer', 'status', 'payment_method', 'payment_status', 'total', 'created_at']
    list_filter = ['status', 'payment_method', 'payment_status', 'created_at']
    search_fields = ['order_number', 'buyer__username', 'buyer__email', 'razorpay_order_id']
    ordering = ['-created_at']
    raw_id_fields = ['buyer', 'address']
    readonly_fields = [
        'order_number', 'status', 'subtotal', 'total', 'paid_at', 'shipped_at',
        'delivered_at', 'cancelled_at', 'created_at', 'updated_at'
    ]
    inlines = [OrderItemInline]
