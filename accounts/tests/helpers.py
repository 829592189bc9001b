# accounts/tests/helpers.py
from django.contrib.auth.models import AnonymousUser
from django.contrib.messages import get_messages
from django.contrib.messages.storage.fallback import FallbackStorage
from django.contrib.sessions.middleware import SessionMiddleware
from django.test import RequestFactory


def build_request(path='/accounts/signup/', method='post', data=None, user=None):
    """Request with a working session and message storage, as the middleware would leave it"""
    factory = RequestFactory()
    request = getattr(factory, method)(path, data or {})
    SessionMiddleware(lambda r: None).process_request(request)
    request.session.save()
    request.user = user or AnonymousUser()
    setattr(request, '_messages', FallbackStorage(request))
    return request


def message_texts(request_or_response):
    if hasattr(request_or_response, 'context') and request_or_response.context is not None:
        return [str(m) for m in request_or_response.context['messages']]
    return [str(m) for m in get_messages(request_or_response)]
