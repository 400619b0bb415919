from django.contrib import admin

from .models import ReturnMessage, ReturnReason, ReturnRequest, ReturnStatusHistory


class ReturnStatusHistoryInline(admin.TabularInline):
    model = ReturnStatusHistory
    extra = 0
    readonly_fields = ['from_status', 'to_status', 'changed_by', 'notes', 'created_at']
    can_delete = False


class ReturnMessageInline(admin.TabularInline):
    model = ReturnMessage
    extra = 0
    readonly_fields = ['sender', 'message', 'created_at']


@admin.register(ReturnRequest)
class ReturnRequestAdmin(admin.ModelAdmin):
    """Status changes go through the API so history stays complete"""
    list_display = ['return_number', 'order', 'buyer', 'seller', 'request_type', 'status', 'refund_status', 'created_at']
    list_filter = ['request_type', 'status', 'refund_status', 'created_at']
    search_fields = ['return_number', 'order__order_number', 'buyer__email', 'order_item__product_name']
    raw_id_fields = ['order', 'order_item', 'buyer', 'seller']
    readonly_fields = ['return_number', 'status', 'approved_at', 'received_at', 'completed_at', 'created_at', 'updated_at']
    inlines = [ReturnStatusHistoryInline, ReturnMessageInline]


@admin.register(ReturnReason)
class ReturnReasonAdmin(admin.ModelAdmin):
    list_display = ['code', 'text', 'requires_media', 'display_order', 'is_active']
    list_editable = ['display_order', 'is_active']
    search_fields = ['code', 'text']
