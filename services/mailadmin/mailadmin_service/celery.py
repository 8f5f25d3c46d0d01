"""Celery application for the mail account administration service."""
from __future__ import annotations

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mailadmin_service.settings")

app = Celery("mailadmin_service")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
