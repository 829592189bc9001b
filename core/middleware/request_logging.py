"""
Request Logging Middleware
Logs HTTP requests and responses for debugging and monitoring
"""
import logging
import time

logger = logging.getLogger(__name__)


def get_client_ip(request):
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


class RequestLoggingMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response
    
    def __call__(self, request):
        start_time = time.time()
        
        user = getattr(request, 'user', None)
        logger.info(
            f"Request: {request.method} {request.path} "
            f"| IP: {get_client_ip(request)} "
            f"| User: {user if user is not None and user.is_authenticated else 'Anonymous'}"
        )
        
        response = self.get_response(request)
        
        duration = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} "
            f"| Duration: {duration:.3f}s "
            f"| {request.method} {request.path}"
        )
        
        return response
    
    def process_exception(self, request, exception):
        """Log exceptions"""
        logger.error(
            f"Exception in {request.method} {request.path}: {exception}",
            exc_info=True
        )
        return None
