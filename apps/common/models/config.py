from django.db import models
from django.conf import settings


class SiteSetting(models.Model):
    """Runtime key/value overrides for business settings"""

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField()
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    class Meta:
        db_table = 'site_settings'
        ordering = ['key']

    def __str__(self):
        return f"{self.key}: {self.value[:50]}"

    @classmethod
    def get_value(cls, key, default=None, cast=None):
        """
        Get a setting by key.

        Falls back to the Django setting of the same upper-cased name, then
        to ``default``.
        """
        try:
            value = cls.objects.get(key=key, is_active=True).value
        except cls.DoesNotExist:
            return getattr(settings, key.upper(), default)
        if cast is not None:
            try:
                return cast(value)
            except (TypeError, ValueError, ArithmeticError):
                return getattr(settings, key.upper(), default)
        return value

    @classmethod
    def set_value(cls, key, value, description='', user=None):
        """Set configuration value"""
        setting, created = cls.objects.get_or_create(
            key=key,
            defaults={
                'value': str(value),
                'description': description,
                'updated_by': user
            }
        )

        if not created:
            setting.value = str(value)
            if description:
                setting.description = description
            setting.updated_by = user
            setting.save()

        return setting
