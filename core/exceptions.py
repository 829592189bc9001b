# core/exceptions.py
"""
Custom exception classes for the Ogwini registration portal.
These exceptions provide more specific error handling for the signup flow
and the hosted auth/database collaborators it talks to.
"""

import logging

logger = logging.getLogger(__name__)


class PortalException(Exception):
    """Base exception for the registration portal"""
    
    log_level = logging.ERROR
    
    def __init__(self, message=None, details=None, user=None):
        self.message = message or "An error occurred in the registration portal"
        self.details = details
        self.user = user
        super().__init__(self.message)
        
        # Log the exception
        logger.log(
            self.log_level,
            f"{self.__class__.__name__}: {self.message} - "
            f"User: {getattr(user, 'username', 'Anonymous')}, "
            f"Details: {details}"
        )


class StepValidationError(PortalException):
    """Raised when a wizard step gate rejects the collected data"""
    
    log_level = logging.INFO
    
    def __init__(self, title, description, step=None, **kwargs):
        self.title = title
        self.description = description
        self.step = step
        super().__init__(description, details={'step': step, 'title': title}, **kwargs)


class AuthServiceError(PortalException):
    """Raised when the auth service cannot be reached or answers garbage"""
    
    def __init__(self, message="Auth service request failed", status_code=None, **kwargs):
        self.status_code = status_code
        super().__init__(message, **kwargs)


class RecordStoreError(PortalException):
    """Raised when a registration row cannot be read or written"""
    
    def __init__(self, message="Record store operation failed", user_id=None, **kwargs):
        self.user_id = user_id
        super().__init__(message, **kwargs)


class SubmissionInProgressError(PortalException):
    """Raised when a registration is submitted while another is still running"""
    
    log_level = logging.WARNING
    
    def __init__(self, message="Registration is already being submitted", **kwargs):
        super().__init__(message, **kwargs)
