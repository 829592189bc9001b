# accounts/services/local.py
"""
Auth service and record store backed by this project's own database.

Accounts are ``CustomUser`` rows.  The matching ``Registration`` row is
created by the ``post_save`` signal in ``accounts.signals`` the moment the
user is saved, so it exists before ``sign_up`` returns.
"""
import logging

from django.contrib.auth import get_user_model, login
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from core.exceptions import RecordStoreError
from ..models import Registration
from .base import AuthResult, AuthService, RecordStore, Session

logger = logging.getLogger(__name__)
User = get_user_model()

LOGIN_BACKEND = 'django.contrib.auth.backends.ModelBackend'


class LocalAuthService(AuthService):

    def sign_up(self, email, password, metadata):
        email = (email or '').strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            logger.info(f"Signup rejected, email already registered: {email}")
            return AuthResult(error="User already registered")

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    first_name=metadata.get('first_name', ''),
                    last_name=metadata.get('last_name', ''),
                    role=metadata.get('role', ''),
                    phone_number=metadata.get('phone', ''),
                )
        except IntegrityError:
            logger.warning(f"Signup raced an existing account for {email}")
            return AuthResult(error="User already registered")

        # Signing up signs the new user in, as the hosted service does
        user.backend = LOGIN_BACKEND
        login(self.request, user)
        logger.info(f"Created account {user.pk} for {email} ({user.role})")
        return AuthResult(user_id=str(user.pk))

    def get_session(self):
        user = getattr(self.request, 'user', None)
        if user is None or not user.is_authenticated:
            return None
        return Session(user_id=str(user.pk), email=user.email, role=user.role)


class LocalRecordStore(RecordStore):

    def await_registration(self, user_id):
        try:
            return Registration.objects.filter(user_id=user_id).exists()
        except (DatabaseError, ValueError) as e:
            raise RecordStoreError(f"Could not look up registration: {e}", user_id=user_id)

    def update_registration(self, user_id, values):
        try:
            with transaction.atomic():
                return Registration.objects.filter(user_id=user_id).update(
                    updated_at=timezone.now(), **values
                )
        except (DatabaseError, ValueError) as e:
            raise RecordStoreError(f"Could not update registration: {e}", user_id=user_id)
