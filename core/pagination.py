"""
Core — Pagination

limit/offset paging, the same parameters the ads listing query uses
(see locations.filtering.build_search_params). ``limit`` is capped.

@file core/pagination.py
"""

from rest_framework.pagination import LimitOffsetPagination

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class StandardPagination(LimitOffsetPagination):
    default_limit = DEFAULT_PAGE_SIZE
    max_limit = MAX_PAGE_SIZE
