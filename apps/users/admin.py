from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, Address


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """User admin with role and seller approval fields"""
    list_display = [
        'username', 'email', 'name', 'role', 'is_co_admin',
        'seller_status', 'is_active', 'created_at'
    ]
    list_filter = ['role', 'is_co_admin', 'seller_status', 'is_active', 'created_at']
    search_fields = ['username', 'email', 'name', 'phone']
    ordering = ['-created_at']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Marketplace', {
            'fields': ('name', 'phone', 'role', 'is_co_admin', 'permissions',
                       'seller_status', 'rejection_reason', 'avatar')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
    readonly_fields = ['created_at', 'updated_at']

    actions = ['approve_sellers']

    def approve_sellers(self, request, queryset):
        updated = queryset.filter(role='seller').update(seller_status='approved')
        self.message_user(request, f'{updated} sellers approved.')
    approve_sellers.short_description = 'Approve selected sellers'


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'city', 'state', 'pincode', 'is_default', 'created_at']
    list_filter = ['state', 'address_type', 'is_default']
    search_fields = ['name', 'phone', 'city', 'pincode', 'user__username']
    raw_id_fields = ['user']
