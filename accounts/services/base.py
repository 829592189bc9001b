# accounts/services/base.py
"""Interfaces for the account and registration-row collaborators"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class AuthResult:
    user_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


@dataclass
class Session:
    user_id: str
    email: str = ''
    access_token: Optional[str] = None
    role: str = ''


class AuthService(ABC):
    """Creates accounts and reports the signed-in session for one request"""

    def __init__(self, request):
        self.request = request
        self.name = self.__class__.__name__

    @abstractmethod
    def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> AuthResult:
        """Create an account; failures come back in ``AuthResult.error``"""
        pass

    @abstractmethod
    def get_session(self) -> Optional[Session]:
        """Return the current session or None when nobody is signed in"""
        pass


class RecordStore(ABC):
    """Reads and writes rows of the registrations table by user id"""

    table = 'registrations'

    def __init__(self, request=None):
        self.request = request
        self.name = self.__class__.__name__

    @abstractmethod
    def await_registration(self, user_id: str) -> bool:
        """Confirm the row created alongside the account exists.

        Raises ``RecordStoreError`` when the store cannot be queried.
        """
        pass

    @abstractmethod
    def update_registration(self, user_id: str, values: Dict[str, Any]) -> int:
        """Update the row for ``user_id``; returns the number of rows changed.

        Raises ``RecordStoreError`` when the store cannot be written.
        """
        pass
