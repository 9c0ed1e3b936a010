"""
WSGI config for the SLIMS project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE", "slims.slims_main.settings.production"
)

application = get_wsgi_application()
