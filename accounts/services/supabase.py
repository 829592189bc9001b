# accounts/services/supabase.py
"""
Auth service and record store for the hosted Supabase project.

Talks to the GoTrue auth endpoint and the PostgREST ``registrations`` table
over HTTPS with ``requests``.  The session returned by signup is kept in the
Django session so later calls can act as the new user.
"""
import logging

import requests
from django.conf import settings
from requests.exceptions import RequestException

from core.exceptions import AuthServiceError, RecordStoreError
from .base import AuthResult, AuthService, RecordStore, Session

logger = logging.getLogger(__name__)

SESSION_KEY = 'supabase_session'


class SupabaseClient:
    """Thin HTTP helper shared by the auth service and the record store"""

    def __init__(self, base_url=None, api_key=None, timeout=None):
        self.base_url = (base_url or getattr(settings, 'SUPABASE_URL', '')).rstrip('/')
        self.api_key = api_key or getattr(settings, 'SUPABASE_ANON_KEY', '')
        self.timeout = timeout or getattr(settings, 'SUPABASE_TIMEOUT', 10)

        if not (self.base_url and self.api_key):
            logger.warning("Supabase URL or anon key not configured")

    def headers(self, access_token=None, **extra):
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {access_token or self.api_key}',
            'Content-Type': 'application/json',
        }
        headers.update(extra)
        return headers

    def request(self, method, path, access_token=None, extra_headers=None, **kwargs):
        url = f'{self.base_url}{path}'
        try:
            return requests.request(
                method,
                url,
                headers=self.headers(access_token, **(extra_headers or {})),
                timeout=self.timeout,
                **kwargs
            )
        except RequestException as e:
            logger.error(f"Supabase {method} {path} failed: {str(e)}")
            raise AuthServiceError(f"Network error: {str(e)}")

    @staticmethod
    def error_message(response):
        try:
            data = response.json()
        except ValueError:
            return response.text or f'HTTP {response.status_code}'
        if not isinstance(data, dict):
            return f'HTTP {response.status_code}'
        return (
            data.get('msg')
            or data.get('message')
            or data.get('error_description')
            or data.get('error')
            or f'HTTP {response.status_code}'
        )


def stored_session(request):
    session = getattr(request, 'session', None)
    data = session.get(SESSION_KEY) if session is not None else None
    if not data or not data.get('user_id'):
        return None
    return Session(
        user_id=data['user_id'],
        email=data.get('email', ''),
        access_token=data.get('access_token'),
        role=data.get('role', ''),
    )


class SupabaseAuthService(AuthService):

    def __init__(self, request, client=None):
        super().__init__(request)
        self.client = client or SupabaseClient()

    def sign_up(self, email, password, metadata):
        payload = {
            'email': email,
            'password': password,
            'data': metadata,
        }
        try:
            response = self.client.request('POST', '/auth/v1/signup', json=payload)
        except AuthServiceError:
            return AuthResult(error='Auth service temporarily unavailable')

        if response.status_code >= 400:
            error_msg = self.client.error_message(response)
            logger.info(f"Supabase signup rejected for {email}: {error_msg}")
            return AuthResult(error=error_msg)

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Supabase signup returned non-JSON body for {email}")
            return AuthResult(error='Unexpected response from auth service')

        # With email confirmation on, the body is the bare user and there is no session
        user = data.get('user') or data
        user_id = user.get('id')
        if not user_id:
            return AuthResult(error='Unexpected response from auth service')

        if data.get('access_token'):
            self.request.session[SESSION_KEY] = {
                'user_id': user_id,
                'email': user.get('email', email),
                'access_token': data['access_token'],
                'refresh_token': data.get('refresh_token'),
                'role': (user.get('user_metadata') or {}).get('role') or metadata.get('role', ''),
            }
        logger.info(f"Supabase account {user_id} created for {email}")
        return AuthResult(user_id=user_id)

    def get_session(self):
        return stored_session(self.request)


class SupabaseRecordStore(RecordStore):

    def __init__(self, request=None, client=None):
        super().__init__(request)
        self.client = client or SupabaseClient()

    def _access_token(self):
        session = stored_session(self.request)
        return session.access_token if session else None

    def _call(self, method, user_id, params=None, **kwargs):
        query = {'user_id': f'eq.{user_id}'}
        query.update(params or {})
        try:
            response = self.client.request(
                method,
                f'/rest/v1/{self.table}',
                access_token=self._access_token(),
                params=query,
                **kwargs
            )
        except AuthServiceError as e:
            raise RecordStoreError(e.message, user_id=user_id)
        if response.status_code >= 400:
            raise RecordStoreError(
                f"{method} {self.table} failed: {self.client.error_message(response)}",
                user_id=user_id,
            )
        try:
            return response.json()
        except ValueError:
            raise RecordStoreError(f"{method} {self.table} returned non-JSON body", user_id=user_id)

    def await_registration(self, user_id):
        rows = self._call('GET', user_id, params={'select': 'user_id', 'limit': '1'})
        return bool(rows)

    def update_registration(self, user_id, values):
        rows = self._call(
            'PATCH',
            user_id,
            json=values,
            extra_headers={'Prefer': 'return=representation'},
        )
        return len(rows or [])
