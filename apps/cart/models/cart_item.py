from django.conf import settings
from django.db import models


class CartItem(models.Model):
    """One cart line per (user, product, variant)"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='cart_items')
    product = models.ForeignKey('products.Product', on_delete=models.CASCADE, related_name='cart_items')
    variant = models.ForeignKey(
        'products.ProductVariant', on_delete=models.CASCADE, null=True, blank=True, related_name='cart_items'
    )
    quantity = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cart_items'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product', 'variant'], name='unique_cart_line'),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.product_id} x{self.quantity}"

    @property
    def unit_price(self):
        if self.variant_id:
            return self.variant.effective_price
        return self.product.price

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    @property
    def available_stock(self):
        if self.variant_id:
            return self.variant.stock
        return self.product.stock
