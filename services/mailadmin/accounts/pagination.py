"""Page-number pagination shaped for the admin data table."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

logger = logging.getLogger(__name__)

ALLOWED_QUERY_KEYS = {"page", "per_page", "search", "sort", "direction"}


def _positive_int(value: Any) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError("must be positive")
    return number


class DataTablePagination(PageNumberPagination):
    """Returns ``{data, current_page, last_page, per_page, total}``.

    Bad ``page`` or ``per_page`` values fall back to their defaults instead of
    failing the request, and a page past the end yields an empty ``data``.
    """

    page_size = 10
    page_size_query_param = "per_page"
    max_page_size = 100

    def _log_unexpected_params(self, request) -> None:
        params = request.query_params
        invalid_keys = sorted(set(params) - ALLOWED_QUERY_KEYS)
        invalid_values = {}
        for key in (self.page_query_param, self.page_size_query_param):
            raw = params.get(key)
            if raw is None:
                continue
            try:
                _positive_int(raw)
            except ValueError:
                invalid_values[key] = raw
        if invalid_keys or invalid_values:
            logger.info(
                "Account list: invalid query params (keys=%s, values=%s)",
                invalid_keys,
                invalid_values,
            )

    def get_page_number(self, request, paginator=None) -> int:  # type: ignore[override]
        try:
            return _positive_int(request.query_params.get(self.page_query_param, 1))
        except ValueError:
            return 1

    def paginate_queryset(self, queryset, request, view=None) -> Optional[List[Any]]:  # type: ignore[override]
        self.request = request
        self._log_unexpected_params(request)

        self.per_page = self.get_page_size(request)
        self.current_page = self.get_page_number(request)

        paginator = self.django_paginator_class(queryset, self.per_page)
        self.total = paginator.count
        self.last_page = max(paginator.num_pages, 1)

        offset = (self.current_page - 1) * self.per_page
        if offset >= self.total:
            return []
        return list(queryset[offset : offset + self.per_page])

    def get_paginated_response(self, data) -> Response:  # type: ignore[override]
        return Response(
            {
                "data": data,
                "current_page": self.current_page,
                "last_page": self.last_page,
                "per_page": self.per_page,
                "total": self.total,
            }
        )

    def get_paginated_response_schema(self, schema):  # type: ignore[override]
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "current_page": {"type": "integer"},
                "last_page": {"type": "integer"},
                "per_page": {"type": "integer"},
                "total": {"type": "integer"},
            },
        }
