# core/__init__.py
"""
Core application for the Ogwini registration portal.
"""

# Export exceptions for easy importing
from .exceptions import (
    PortalException,
    StepValidationError,
    AuthServiceError,
    RecordStoreError,
    SubmissionInProgressError,
)
