from django.db import models


class FooterContent(models.Model):
    """A block of storefront footer text grouped by section"""
    section = models.CharField(max_length=100, db_index=True)
    title = models.CharField(max_length=200)
    content = models.TextField()
    order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'footer_contents'
        verbose_name = 'Footer Content'
        verbose_name_plural = 'Footer Contents'
        ordering = ['section', 'order', 'id']

    def __str__(self):
        return f"{self.section}: {self.title}"
