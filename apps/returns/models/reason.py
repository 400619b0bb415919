from django.db import models


class ReturnReason(models.Model):
    """Catalogue of reasons a buyer can pick from"""
    code = models.SlugField(max_length=50, unique=True)
    text = models.CharField(max_length=255)
    applicable_types = models.JSONField(
        default=list, blank=True,
        help_text="Request types this reason applies to; empty means all"
    )
    requires_media = models.BooleanField(default=False, help_text="Buyer must attach photos")
    display_order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'return_reasons'
        ordering = ['display_order', 'id']

    def __str__(self):
        return self.text

    def applies_to(self, request_type):
        return not self.applicable_types or request_type in self.applicable_types
