"""API error handling for the mailadmin service."""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Render unexpected errors as a JSON 500 instead of an HTML error page."""

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", type(view).__name__ if view else "API view")
    payload = {
        "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "message": "An unexpected error occurred.",
    }
    if settings.DEBUG:
        payload["debug"] = str(exc)
    return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
