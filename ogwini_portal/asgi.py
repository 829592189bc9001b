"""
ASGI config for ogwini_portal project.
"""

import os
import logging
from django.core.asgi import get_asgi_application

logger = logging.getLogger(__name__)

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'ogwini_portal.settings')

application = get_asgi_application()
