# accounts/clipboard.py
"""
Copy feedback for the banking reference rows.

The clipboard write itself happens in the browser; the server only remembers
which row was copied and when, so the page can show a transient check mark
that clears itself after a fixed number of seconds.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.utils import timezone


def feedback_seconds():
    return getattr(settings, 'SIGNUP_COPY_FEEDBACK_SECONDS', 2)


@dataclass
class CopyFeedback:
    field: Optional[str] = None
    copied_at: Optional[str] = None  # ISO timestamp, kept JSON friendly for the session

    def mark(self, field, now=None):
        now = now or timezone.now()
        self.field = field
        self.copied_at = now.isoformat()

    def expires_at(self):
        if not self.copied_at:
            return None
        return datetime.fromisoformat(self.copied_at) + timedelta(seconds=feedback_seconds())

    def active_field(self, now=None):
        """Return the copied field while its flag is live, clearing it once expired"""
        if self.field is None:
            return None
        now = now or timezone.now()
        if now >= self.expires_at():
            self.clear()
            return None
        return self.field

    def clear(self):
        self.field = None
        self.copied_at = None
