from django.contrib import admin

from .models import RewardAccount, RewardTransaction, RewardRule


class RewardTransactionInline(admin.TabularInline):
    model = RewardTransaction
    extra = 0
    fields = ['transaction_type', 'points', 'balance_after', 'remaining_points', 'status', 'expiry_date', 'created_at']
    readonly_fields = fields
    can_delete = False


@admin.register(RewardAccount)
class RewardAccountAdmin(admin.ModelAdmin):
    list_display = ['user', 'points', 'lifetime_earned', 'lifetime_redeemed', 'referral_code', 'updated_at']
    search_fields = ['user__username', 'user__email', 'user__name', 'referral_code']
    readonly_fields = ['lifetime_earned', 'lifetime_redeemed', 'created_at', 'updated_at']
    inlines = [RewardTransactionInline]


@admin.register(RewardTransaction)
class RewardTransactionAdmin(admin.ModelAdmin):
    list_display = ['account', 'transaction_type', 'points', 'balance_after', 'status', 'order_id', 'created_at']
    list_filter = ['transaction_type', 'status', 'created_at']
    search_fields = ['account__user__username', 'account__user__email', 'order_id', 'description']
    readonly_fields = [f.name for f in RewardTransaction._meta.fields]

    def has_add_permission(self, request):
        return False


@admin.register(RewardRule)
class RewardRuleAdmin(admin.ModelAdmin):
    list_display = ['name', 'rule_type', 'points_per_unit', 'fixed_points', 'max_points', 'validity_days', 'is_active']
    list_filter = ['rule_type', 'is_active']
    list_editable = ['is_active']
    fieldsets = (
        (None, {'fields': ('name', 'rule_type', 'description', 'is_active')}),
        ('Points', {'fields': ('points_per_unit', 'fixed_points', 'max_points', 'min_order_amount')}),
        ('Expiry', {'fields': ('validity_days',)}),
    )
