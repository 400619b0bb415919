from django.contrib import admin

from .models import BulkItem, BulkOrder, BulkOrderItem, Distributor, DistributorLedgerEntry


class LedgerEntryInline(admin.TabularInline):
    model = DistributorLedgerEntry
    extra = 0
    fields = ['entry_type', 'order_type', 'order_id', 'amount', 'balance_after', 'payment_method', 'created_at']
    readonly_fields = fields
    can_delete = False
    ordering = ['-id']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Distributor)
class DistributorAdmin(admin.ModelAdmin):
    list_display = ['business_name', 'user', 'phone', 'current_balance', 'credit_limit', 'is_active']
    list_filter = ['is_active', 'state']
    search_fields = ['business_name', 'contact_name', 'user__email', 'gstin', 'phone']
    readonly_fields = ['total_ordered', 'total_paid', 'current_balance', 'created_at', 'updated_at']
    fieldsets = (
        (None, {'fields': ('user', 'business_name', 'contact_name', 'phone', 'gstin', 'is_active')}),
        ('Address', {'fields': ('address', 'city', 'state', 'pincode')}),
        ('Account', {'fields': ('credit_limit', 'total_ordered', 'total_paid', 'current_balance')}),
        ('Other', {'fields': ('notes', 'created_at', 'updated_at'), 'classes': ('collapse',)}),
    )
    inlines = [LedgerEntryInline]


@admin.register(DistributorLedgerEntry)
class DistributorLedgerEntryAdmin(admin.ModelAdmin):
    """Entries are written by the ledger service only"""
    list_display = ['id', 'distributor', 'entry_type', 'order_type', 'order_id', 'amount', 'balance_after', 'created_at']
    list_filter = ['entry_type', 'order_type', 'payment_method']
    search_fields = ['distributor__business_name', 'reference', 'description']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(BulkItem)
class BulkItemAdmin(admin.ModelAdmin):
    list_display = ['product', 'allow_pieces', 'allow_sets', 'pieces_per_set', 'selling_price', 'updated_at']
    list_filter = ['allow_pieces', 'allow_sets']
    search_fields = ['product__name', 'product__sku']
    raw_id_fields = ['product']


class BulkOrderItemInline(admin.TabularInline):
    model = BulkOrderItem
    extra = 0
    readonly_fields = ['product', 'order_type', 'quantity', 'pieces_per_set', 'unit_price', 'total_price']
    can_delete = False


@admin.register(BulkOrder)
class BulkOrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'distributor', 'status', 'payment_type', 'subtotal', 'total_amount', 'created_at']
    list_filter = ['status', 'payment_type', 'created_at']
    search_fields = ['distributor__email', 'distributor__name']
    readonly_fields = ['subtotal', 'total_amount', 'created_at', 'updated_at']
    inlines = [BulkOrderItemInline]
