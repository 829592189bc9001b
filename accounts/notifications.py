# accounts/notifications.py
"""
Toast notifications on top of ``django.contrib.messages``.

A toast has a title, a description and a variant.  The variant picks the
message level and is also kept in ``extra_tags`` so templates can style it;
the title travels inside the message text as ``"<title>: <description>"``.
"""
from django.contrib import messages

DEFAULT = 'default'
SUCCESS = 'success'
WARNING = 'warning'
DESTRUCTIVE = 'destructive'

VARIANT_LEVELS = {
    DEFAULT: messages.INFO,
    SUCCESS: messages.SUCCESS,
    WARNING: messages.WARNING,
    DESTRUCTIVE: messages.ERROR,
}


def format_toast(title, description):
    return f"{title}: {description}" if description else title


def notify(request, title, description='', variant=DEFAULT):
    """Queue a toast for the next rendered page; nothing is returned"""
    messages.add_message(
        request,
        VARIANT_LEVELS.get(variant, messages.INFO),
        format_toast(title, description),
        extra_tags=f"toast {variant}",
        fail_silently=True,
    )


def notify_validation_error(request, error):
    notify(request, error.title, error.description, DESTRUCTIVE)
