from django.db import models


class ProductVariant(models.Model):
    """Color/size variant with its own stock and optional price override"""
    product = models.ForeignKey('Product', on_delete=models.CASCADE, related_name='variants')
    sku = models.CharField(max_length=100, blank=True)
    color = models.CharField(max_length=50, blank=True)
    size = models.CharField(max_length=50, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    mrp = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    stock = models.PositiveIntegerField(default=0)
    image_url = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'product_variants'
        ordering = ['id']
        indexes = [
            models.Index(fields=['product', 'sku']),
        ]

    def __str__(self):
        label = ' / '.join(part for part in [self.color, self.size] if part)
        return f"{self.product.name} ({label or self.sku or self.pk})"

    @property
    def effective_price(self):
        return self.price if self.price is not None else self.product.price
