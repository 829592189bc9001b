from django.utils.deprecation import MiddlewareMixin


class SecurityHeadersMiddleware(MiddlewareMixin):
    """
    Custom security headers middleware for enhanced security
    """
    def process_response(self, request, response):
        response['X-Content-Type-Options'] = 'nosniff'
        response['X-Frame-Options'] = 'DENY'
        response['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        # Banking reference copy buttons write to the clipboard
        response['Permissions-Policy'] = 'clipboard-write=(self), camera=(), microphone=()'

        # Remove server header
        if 'Server' in response:
            del response['Server']

        return response
