"""Page-number pagination shared by every list endpoint.

Clients choose the page size with ``limit`` (``page_size`` is accepted
as an alias) up to ``max_page_size``.
"""

from __future__ import annotations

import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100

    def get_page_size(self, request):
        if "limit" not in request.query_params and "page_size" in request.query_params:
            self.page_size_query_param = "page_size"
        return super().get_page_size(request)

    def get_paginated_response(self, data):
        count = self.page.paginator.count
        page_size = self.page.paginator.per_page
        return Response(
            {
                "count": count,
                "page": self.page.number,
                "limit": page_size,
                "total_pages": math.ceil(count / page_size) if page_size else 0,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )
