"""Shared `page` / `limit` query parameters."""

from dataclasses import dataclass

from fastapi import Query

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class Page:
    page: int
    limit: int


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> Page:
    return Page(page=page, limit=limit)
