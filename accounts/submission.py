# accounts/submission.py
"""
Terminal step of the signup wizard: create the account, fill in the
registration row and pick the dashboard to land on.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from core.exceptions import RecordStoreError, SubmissionInProgressError
from core.utils.logger import log_signup_action
from . import notifications
from .roles import dashboard_route_for

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    success: bool
    redirect_url: Optional[str] = None
    error: Optional[str] = None
    profile_saved: bool = False


class RegistrationSubmitter:
    """Runs the submission protocol for one wizard against the configured backends"""

    def __init__(self, request, wizard, auth_service, record_store):
        self.request = request
        self.wizard = wizard
        self.auth_service = auth_service
        self.record_store = record_store

    def submit(self):
        if self.wizard.loading:
            raise SubmissionInProgressError(details={'email': self.wizard.form_data.email})

        data = self.wizard.form_data
        self._set_loading(True)
        try:
            result = self.auth_service.sign_up(data.email, data.password, data.signup_metadata())
            if not result.ok:
                notifications.notify(
                    self.request, "Registration Failed", result.error, notifications.DESTRUCTIVE
                )
                log_signup_action('signup', data.email, data.role, status='rejected',
                                  extra={'reason': result.error})
                return SubmissionResult(success=False, error=result.error)

            profile_saved = self._save_profile(result.user_id)

            notifications.notify(
                self.request,
                "Registration Successful!",
                "Welcome! Redirecting to your dashboard...",
                notifications.SUCCESS,
            )
            log_signup_action('signup', data.email, data.role,
                              status='success' if profile_saved else 'partial')
            return SubmissionResult(
                success=True,
                redirect_url=dashboard_route_for(data.role),
                profile_saved=profile_saved,
            )
        except Exception as e:
            logger.error(f"Registration error: {str(e)}", exc_info=True)
            notifications.notify(
                self.request,
                "Registration Failed",
                "An error occurred. Please try again.",
                notifications.DESTRUCTIVE,
            )
            log_signup_action('signup', data.email, data.role, status='error')
            return SubmissionResult(success=False, error=str(e))
        finally:
            self._set_loading(False)

    def _set_loading(self, value):
        self.wizard.loading = value
        self.wizard.save(self.request.session)
        # Written through now so a concurrent request for this session sees the flag
        self.request.session.save()

    def _save_profile(self, user_id):
        """Write the collected details to the registration row.

        The account already exists at this point, so a failure here is kept
        as a partial success: logged, flagged to the user, never rolled back.
        """
        session = self.auth_service.get_session()
        if session is None:
            # Account awaits email confirmation; nothing can be read or written as the user yet
            logger.info(f"No session after signup for user {user_id}, profile update skipped")
            return False

        try:
            if not self.record_store.await_registration(session.user_id):
                raise RecordStoreError("Registration row was not created", user_id=session.user_id)

            updated = self.record_store.update_registration(
                session.user_id, self.wizard.form_data.registration_fields()
            )
            if not updated:
                raise RecordStoreError("Registration row update matched no rows", user_id=session.user_id)
            return True
        except RecordStoreError as e:
            logger.error(f"Account {user_id} created but profile not saved: {e.message}")
            notifications.notify(
                self.request,
                "Profile Incomplete",
                "Your account was created but some details could not be saved. "
                "You can update them from your dashboard.",
                notifications.WARNING,
            )
            return False
