from .request_logging import RequestLoggingMiddleware
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    'RequestLoggingMiddleware',
    'SecurityHeadersMiddleware',
]
