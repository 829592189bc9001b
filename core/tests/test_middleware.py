from django.http import HttpResponse
import logging

from django.test import RequestFactory, SimpleTestCase

from core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from core.middleware.request_logging import get_client_ip


class SecurityHeadersMiddlewareTest(SimpleTestCase):

    def test_headers_allow_clipboard_write(self):
        middleware = SecurityHeadersMiddleware(lambda request: HttpResponse('ok'))

        response = middleware(RequestFactory().get('/accounts/signup/'))

        self.assertEqual(response['X-Frame-Options'], 'DENY')
        self.assertEqual(response['X-Content-Type-Options'], 'nosniff')
        self.assertIn('clipboard-write=(self)', response['Permissions-Policy'])


class RequestLoggingMiddlewareTest(SimpleTestCase):

    def setUp(self):
        # Test settings silence logging globally
        logging.disable(logging.NOTSET)
        self.addCleanup(logging.disable, logging.CRITICAL)

    def test_request_and_response_are_logged(self):
        middleware = RequestLoggingMiddleware(lambda request: HttpResponse(status=302))

        with self.assertLogs('core.middleware.request_logging', level='INFO') as logs:
            response = middleware(RequestFactory().post('/accounts/signup/'))

        self.assertEqual(response.status_code, 302)
        self.assertIn('Request: POST /accounts/signup/', logs.output[0])
        self.assertIn('Response: 302', logs.output[1])

    def test_client_ip_prefers_forwarded_header(self):
        request = RequestFactory().get('/', HTTP_X_FORWARDED_FOR='41.13.2.7, 10.0.0.1')
        self.assertEqual(get_client_ip(request), '41.13.2.7')

    def test_client_ip_falls_back_to_remote_addr(self):
        self.assertEqual(get_client_ip(RequestFactory().get('/')), '127.0.0.1')
