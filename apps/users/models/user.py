from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Marketplace user with a single role and optional co-admin permissions"""
    ROLE_CHOICES = [
        ('buyer', 'Buyer'),
        ('seller', 'Seller'),
        ('distributor', 'Distributor'),
        ('admin', 'Admin'),
    ]

    SELLER_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=20, null=True, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='buyer', db_index=True)
    is_co_admin = models.BooleanField(default=False, help_text="Admin with a restricted permission set")
    permissions = models.JSONField(default=list, blank=True, help_text="Permission keys granted to a co-admin")
    seller_status = models.CharField(
        max_length=20, choices=SELLER_STATUS_CHOICES, null=True, blank=True,
        help_text="Approval state, only meaningful for sellers"
    )
    rejection_reason = models.TextField(blank=True)
    avatar = models.URLField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        indexes = [
            models.Index(fields=['role', 'seller_status']),
        ]

    def __str__(self):
        return self.username or self.email or f"User {self.id}"

    def save(self, *args, **kwargs):
        # New sellers wait for approval
        if self.role == 'seller' and not self.seller_status:
            self.seller_status = 'pending'
        if self.role != 'admin':
            self.is_co_admin = False
        super().save(*args, **kwargs)

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.username
