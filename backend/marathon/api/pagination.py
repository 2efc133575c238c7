"""Shared pagination query parameters."""

from dataclasses import dataclass

from fastapi import Query

from marathon.config import get_settings

settings = get_settings()


@dataclass
class PageParams:
    page: int
    page_size: int


def page_params(
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: int = Query(
        settings.default_page_size, alias="pageSize", ge=1, le=settings.max_page_size
    ),
) -> PageParams:
    return PageParams(page=page, page_size=page_size)
