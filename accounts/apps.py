# accounts/apps.py
from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Accounts & Registration'

    def ready(self):
        # Register signal handlers
        import accounts.signals  # noqa: F401
        logger.debug("Accounts signals registered")
