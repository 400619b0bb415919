from django.contrib import admin

from .models import CartItem


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ['user', 'product', 'variant', 'quantity', 'updated_at']
    search_fields = ['user__username', 'product__name']
    raw_id_fields = ['user', 'product', 'variant']
