"""WSGI config for the mailadmin service."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mailadmin_service.settings")

application = get_wsgi_application()
