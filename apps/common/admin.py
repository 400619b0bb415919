from django.contrib import admin

from .models import SiteSetting


class BaseModelAdmin(admin.ModelAdmin):
    """Base admin class with common functionality"""

    def get_readonly_fields(self, request, obj=None):
        """Make created_at and updated_at fields readonly by default"""
        readonly_fields = list(super().get_readonly_fields(request, obj))

        if hasattr(self.model, 'created_at') and 'created_at' not in readonly_fields:
            readonly_fields.append('created_at')
        if hasattr(self.model, 'updated_at') and 'updated_at' not in readonly_fields:
            readonly_fields.append('updated_at')

        return readonly_fields


@admin.register(SiteSetting)
class SiteSettingAdmin(BaseModelAdmin):
    """Admin interface for site settings"""

    list_display = ['key', 'value_preview', 'is_active', 'updated_by', 'updated_at']
    list_filter = ['is_active', 'updated_at']
    search_fields = ['key', 'value', 'description']
    ordering = ['key']

    fieldsets = (
        ('Setting', {
            'fields': ('key', 'value', 'description', 'is_active')
        }),
        ('Metadata', {
            'fields': ('updated_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def value_preview(self, obj):
        if len(obj.value) > 50:
            return obj.value[:50] + '...'
        return obj.value
    value_preview.short_description = 'Value'

    def save_model(self, request, obj, form, change):
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)
