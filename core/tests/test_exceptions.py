import logging

from django.test import SimpleTestCase

from core.exceptions import AuthServiceError, PortalException, RecordStoreError, StepValidationError
from core.utils.logger import log_signup_action, log_view_exception


class PortalExceptionTest(SimpleTestCase):

    def setUp(self):
        logging.disable(logging.NOTSET)
        self.addCleanup(logging.disable, logging.CRITICAL)

    def test_step_validation_error_carries_toast_text(self):
        with self.assertLogs('core.exceptions', level='INFO'):
            error = StepValidationError("Select Grade", "Please select your grade.", step='details')

        self.assertEqual(error.title, "Select Grade")
        self.assertEqual(error.description, "Please select your grade.")
        self.assertEqual(error.step, 'details')
        self.assertIsInstance(error, PortalException)

    def test_service_errors_log_at_error_level(self):
        with self.assertLogs('core.exceptions', level='ERROR') as logs:
            RecordStoreError("update failed", user_id='uuid-1')
        self.assertIn('RecordStoreError: update failed', logs.output[0])

    def test_auth_service_error_default_message(self):
        with self.assertLogs('core.exceptions', level='ERROR'):
            error = AuthServiceError(status_code=503)
        self.assertEqual(error.message, "Auth service request failed")
        self.assertEqual(error.status_code, 503)


class SignupLoggingTest(SimpleTestCase):

    def setUp(self):
        logging.disable(logging.NOTSET)
        self.addCleanup(logging.disable, logging.CRITICAL)

    def test_audit_record_has_action_fields(self):
        with self.assertLogs('core.signup.audit', level='INFO') as logs:
            log_signup_action('signup', 'thandi@example.com', 'teacher', status='partial')

        record = logs.records[0]
        self.assertEqual(record.action, 'signup')
        self.assertEqual(record.email, 'thandi@example.com')
        self.assertEqual(record.role, 'teacher')
        self.assertEqual(record.status, 'partial')

    def test_view_exceptions_are_logged_and_reraised(self):
        @log_view_exception('broken_view')
        def broken_view(request):
            raise RuntimeError('boom')

        with self.assertLogs('core.signup', level='ERROR') as logs:
            with self.assertRaises(RuntimeError):
                broken_view(None)
        self.assertIn('Error in broken_view: boom', logs.output[0])
