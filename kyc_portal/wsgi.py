"""
WSGI config for kyc_portal.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "kyc_portal.settings")

application = get_wsgi_application()
