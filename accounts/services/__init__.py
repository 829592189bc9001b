# accounts/services/__init__.py
from django.conf import settings

from .base import AuthResult, AuthService, RecordStore, Session
from .local import LocalAuthService, LocalRecordStore
from .supabase import SupabaseAuthService, SupabaseRecordStore


class SignupBackendFactory:
    """Factory to create the auth service and record store for a request"""

    AUTH_SERVICES = {
        'local': LocalAuthService,
        'supabase': SupabaseAuthService,
    }
    RECORD_STORES = {
        'local': LocalRecordStore,
        'supabase': SupabaseRecordStore,
    }

    @staticmethod
    def backend_name(name=None):
        return (name or getattr(settings, 'SIGNUP_AUTH_BACKEND', 'local')).lower()

    @classmethod
    def get_auth_service(cls, request, backend_name=None) -> AuthService:
        name = cls.backend_name(backend_name)
        service_class = cls.AUTH_SERVICES.get(name)
        if not service_class:
            raise ValueError(f"Unknown signup backend: {name}")
        return service_class(request)

    @classmethod
    def get_record_store(cls, request, backend_name=None) -> RecordStore:
        name = cls.backend_name(backend_name)
        store_class = cls.RECORD_STORES.get(name)
        if not store_class:
            raise ValueError(f"Unknown signup backend: {name}")
        return store_class(request)


__all__ = [
    'AuthResult',
    'AuthService',
    'RecordStore',
    'Session',
    'LocalAuthService',
    'LocalRecordStore',
    'SupabaseAuthService',
    'SupabaseRecordStore',
    'SignupBackendFactory',
]
