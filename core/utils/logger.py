# core/utils/logger.py
"""
Centralized audit logging for the signup flow
"""
import functools
import logging

signup_logger = logging.getLogger('core.signup')
audit_logger = logging.getLogger('core.signup.audit')


def log_signup_action(action, email=None, role=None, status='success', extra=None):
    """Log signup actions for the audit trail"""
    log_data = {
        'action': action,
        'status': status,
        'email': email or 'unknown',
        'role': role or 'unknown',
    }
    
    if extra:
        log_data.update(extra)
    
    audit_logger.info(action, extra=log_data)


def log_view_exception(view_name):
    """
    Decorator to log exceptions in views
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(request, *args, **kwargs):
            try:
                return func(request, *args, **kwargs)
            except Exception as e:
                user = getattr(request, 'user', None)
                signup_logger.error(
                    f"Error in {view_name}: {str(e)}",
                    exc_info=True,
                    extra={
                        'view': view_name,
                        'username': getattr(user, 'username', 'anonymous') or 'anonymous',
                    }
                )
                raise
        return wrapper
    return decorator
