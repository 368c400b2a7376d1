from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal, Protocol, TypeVar

from app.models.schemas import Article, Pagination


MAX_LIMIT = 100
DEFAULT_LIMIT = 10

SortOrder = Literal["asc", "desc"]


class _HasId(Protocol):
    id: int


ItemT = TypeVar("ItemT", bound=_HasId)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class PageParams:
    offset: int = 0
    limit: int = DEFAULT_LIMIT
    sort: SortOrder = "asc"


def _to_int(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    # Leading integer prefix only: "10abc" -> 10, "1.5" -> 1.
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def parse_page_params(
    offset: str | int | None = None,
    limit: str | int | None = None,
    sort: str | None = None,
) -> PageParams:
    """Leniently turn raw query values into clamped paging parameters."""

    parsed_offset = _to_int(offset)
    parsed_limit = _to_int(limit)

    return PageParams(
        offset=max(0, parsed_offset) if parsed_offset is not None else 0,
        limit=min(MAX_LIMIT, max(1, parsed_limit)) if parsed_limit is not None else DEFAULT_LIMIT,
        sort="desc" if sort == "desc" else "asc",
    )


def paginate(items: Iterable[ItemT], params: PageParams) -> tuple[list[ItemT], Pagination]:
    ordered = sorted(items, key=lambda item: item.id, reverse=params.sort == "desc")
    total = len(ordered)
    page = ordered[params.offset : params.offset + params.limit]
    return page, Pagination(
        offset=params.offset,
        limit=params.limit,
        total=total,
        has_more=params.offset + params.limit < total,
    )


def _matches(article: Article, needle: str) -> bool:
    return (
        needle in article.title.lower()
        or needle in article.content.lower()
        or needle in article.author.lower()
        or any(needle in tag.lower() for tag in article.tags)
    )


def search_articles(articles: Sequence[Article], term: str | None) -> list[Article]:
    needle = (term or "").strip().lower()
    if not needle:
        return list(articles)
    return [article for article in articles if _matches(article, needle)]
