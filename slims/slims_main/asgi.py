"""
ASGI config for the SLIMS project.

It exposes the ASGI callable as a module-level variable named ``application``.
"""

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE", "slims.slims_main.settings.production"
)

application = get_asgi_application()
