from .logger import log_signup_action, log_view_exception

__all__ = [
    'log_signup_action',
    'log_view_exception',
]
