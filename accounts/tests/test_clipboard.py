from datetime import timedelta

from django.test import SimpleTestCase, override_settings
from django.utils import timezone

from accounts.clipboard import CopyFeedback


class CopyFeedbackTest(SimpleTestCase):

    def setUp(self):
        self.now = timezone.now()
        self.feedback = CopyFeedback()
        self.feedback.mark('Account Number', now=self.now)

    def test_flag_is_live_just_before_two_seconds(self):
        later = self.now + timedelta(seconds=1, milliseconds=999)
        self.assertEqual(self.feedback.active_field(now=later), 'Account Number')

    def test_flag_clears_at_two_seconds(self):
        later = self.now + timedelta(seconds=2)
        self.assertIsNone(self.feedback.active_field(now=later))
        self.assertIsNone(self.feedback.field)
        self.assertIsNone(self.feedback.copied_at)

    def test_new_copy_replaces_previous_field(self):
        self.feedback.mark('Reference', now=self.now + timedelta(seconds=1))
        self.assertEqual(
            self.feedback.active_field(now=self.now + timedelta(seconds=2, milliseconds=500)),
            'Reference',
        )

    def test_nothing_copied(self):
        self.assertIsNone(CopyFeedback().active_field())
        self.assertIsNone(CopyFeedback().expires_at())

    @override_settings(SIGNUP_COPY_FEEDBACK_SECONDS=5)
    def test_duration_is_configurable(self):
        self.assertEqual(self.feedback.expires_at(), self.now + timedelta(seconds=5))
