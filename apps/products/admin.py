from django.contrib import admin

from .models import Category, Product, ProductVariant, ProductImage


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'parent', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'seller', 'category', 'price', 'mrp', 'stock', 'approval_status', 'is_active', 'created_at']
    list_filter = ['approval_status', 'is_active', 'category']
    search_fields = ['name', 'sku', 'hsn', 'seller__username']
    raw_id_fields = ['seller']
    inlines = [ProductVariantInline, ProductImageInline]
    readonly_fields = ['created_at', 'updated_at']

    actions = ['approve_products']

    def approve_products(self, request, queryset):
        updated = queryset.update(approval_status='approved', rejection_reason='')
        self.message_user(request, f'{updated} products approved.')
    approve_products.short_description = 'Approve selected products'
