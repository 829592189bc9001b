# core/context_processors.py
from django.conf import settings

from accounts.services.supabase import stored_session


def settings_context(request):
    """
    Expose certain settings to templates
    """
    user = getattr(request, 'user', None)
    return {
        'DEBUG': settings.DEBUG,
        'SCHOOL_NAME': getattr(settings, 'SCHOOL_NAME', 'Ogwini Comprehensive Technical High School'),
        'SCHOOL_SHORT_NAME': getattr(settings, 'SCHOOL_SHORT_NAME', 'Ogwini'),
        'SCHOOL_EMAIL': getattr(settings, 'SCHOOL_EMAIL', 'info@ogwini.co.za'),
        'SCHOOL_PHONE': getattr(settings, 'SCHOOL_PHONE', ''),
        'VERSION': getattr(settings, 'VERSION', '1.0.0'),
        # Hosted-backend accounts are signed in without a Django user
        'signed_in': bool(user is not None and user.is_authenticated) or stored_session(request) is not None,
    }
