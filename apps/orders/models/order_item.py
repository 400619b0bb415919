from django.conf import settings
from django.db import models


class OrderItem(models.Model):
    """Order line with a snapshot of the product at purchase time"""

    order = models.ForeignKey('Order', on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('products.Product', on_delete=models.SET_NULL, null=True, related_name='order_items')
    variant = models.ForeignKey(
        'products.ProductVariant', on_delete=models.SET_NULL, null=True, blank=True, related_name='order_items'
    )
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='sold_items'
    )
    product_name = models.CharField(max_length=255)
    variant_label = models.CharField(max_length=120, blank=True)
    sku = models.CharField(max_length=100, blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']
        indexes = [
            models.Index(fields=['seller']),
        ]

    def __str__(self):
        return f"{self.product_name} x{self.quantity} ({self.order_id})"

    def save(self, *args, **kwargs):
        if self.total_price is None:
            self.total_price = self.unit_price * self.quantity
        super().save(*args, **kwargs)
