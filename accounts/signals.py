# accounts/signals.py
import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_registration_for_new_user(sender, instance, created, **kwargs):
    """Open the registration row the moment an account is created"""
    if not created:
        return

    from .models import Registration

    registration, was_created = Registration.objects.get_or_create(
        user=instance,
        defaults={
            'role': instance.role,
            'first_name': instance.first_name,
            'last_name': instance.last_name,
            'email': instance.email,
            'phone': instance.phone_number,
        }
    )
    if was_created:
        logger.debug(f"Registration row {registration.pk} opened for user {instance.pk}")
