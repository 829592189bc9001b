from django.contrib.auth.models import AbstractUser
from django.db import models

from .roles import Role


class CustomUser(AbstractUser):
    phone_number = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, blank=True)

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return self.username

    def get_role_display_name(self):
        return self.get_role_display() or 'Member'

    @property
    def dashboard_role(self):
        """Role used to pick a dashboard; staff without a role count as administrators"""
        if not self.role and self.is_staff:
            return Role.ADMIN
        return self.role


class Registration(models.Model):
    """Per-user registration row holding profile and guardian details"""

    user = models.OneToOneField(
        CustomUser, on_delete=models.CASCADE, related_name='registration'
    )
    role = models.CharField(max_length=20, choices=Role.choices, blank=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    id_number = models.CharField(max_length=13, blank=True, help_text="13-digit SA ID number")
    address = models.TextField(blank=True)
    grade = models.CharField(max_length=20, blank=True)
    parent_name = models.CharField(max_length=150, blank=True)
    parent_phone = models.CharField(max_length=20, blank=True)
    parent_email = models.EmailField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'registrations'
        ordering = ['-created_at']
        verbose_name = 'Registration'
        verbose_name_plural = 'Registrations'
        indexes = [
            models.Index(fields=['role', 'grade'], name='registrations_role_grade_idx'),
            models.Index(fields=['email'], name='registrations_email_idx'),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name} ({self.get_role_display() or 'no role'})"

    @property
    def payment_reference(self):
        return f"REG-{self.id_number or '[YOUR ID]'}"
