from django.contrib import admin

from .models import FooterContent


@admin.register(FooterContent)
class FooterContentAdmin(admin.ModelAdmin):
    list_display = ['title', 'section', 'order', 'is_active', 'updated_at']
    list_filter = ['section', 'is_active']
    list_editable = ['order', 'is_active']
    search_fields = ['title', 'content']
    ordering = ['section', 'order']
