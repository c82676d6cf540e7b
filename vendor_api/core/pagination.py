"""Pagination helpers for list endpoints."""

import math

from fastapi import Query, Request
from pydantic import BaseModel

# Largest page/limit accepted from a query string; larger values are clamped
MAX_QUERY_VALUE = 2**31 - 1
# Largest OFFSET the store drivers accept (signed 64-bit)
MAX_OFFSET = 2**63 - 1


def _positive_int(raw: str | None, default: int) -> int:
    """Parse a query value as an int in [1, MAX_QUERY_VALUE], falling back to ``default``."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if value < 1:
        return default
    return min(value, MAX_QUERY_VALUE)


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=10`.

    Absent, non-numeric or non-positive values fall back to the defaults
    instead of failing the request. The default limit comes from the
    application's settings.
    """

    def __init__(
        self,
        request: Request,
        page: str | None = Query(default=None, description="Page number (1-based)"),
        limit: str | None = Query(default=None, description="Items per page"),
    ):
        default_limit = request.app.state.settings.default_page_limit
        self.page = _positive_int(page, 1)
        self.limit = _positive_int(limit, default_limit)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PageMeta":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
