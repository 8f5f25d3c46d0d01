"""Ordering for the account data table."""
from __future__ import annotations

from rest_framework.filters import BaseFilterBackend


class DataTableOrderingFilter(BaseFilterBackend):
    """Order by ``sort``/``direction`` query parameters.

    Only fields listed in the view's ``ordering_fields`` are honoured; any
    other ``sort`` falls back to the view's ``ordering``, and any direction
    other than ``asc``/``desc`` falls back to ``desc``.
    """

    sort_param = "sort"
    direction_param = "direction"
    directions = ("asc", "desc")
    default_direction = "desc"

    def get_ordering(self, request, view) -> str:
        allowed = getattr(view, "ordering_fields", [])
        default = getattr(view, "ordering", None) or "pk"

        sort = request.query_params.get(self.sort_param) or default
        if sort not in allowed:
            sort = default

        direction = request.query_params.get(self.direction_param) or self.default_direction
        if direction not in self.directions:
            direction = self.default_direction

        return sort if direction == "asc" else f"-{sort}"

    def filter_queryset(self, request, queryset, view):
        ordering = self.get_ordering(request, view)
        return queryset.order_by(ordering, "id")
