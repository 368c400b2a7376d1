import pytest

from app.models.schemas import DemoItem
from app.services.article_service import make_excerpt, sample_articles
from app.services.listing import PageParams, paginate, parse_page_params, search_articles


def _items(total: int) -> list[DemoItem]:
    return [DemoItem(id=i, name=f"Item {i}", value=i) for i in range(1, total + 1)]


@pytest.mark.parametrize(
    "offset,limit,total",
    [(0, 10, 100), (95, 10, 100), (100, 10, 100), (150, 1, 100), (0, 100, 37), (36, 1, 37), (0, 5, 0)],
)
def test_page_length_and_has_more(offset: int, limit: int, total: int) -> None:
    page, meta = paginate(_items(total), PageParams(offset=offset, limit=limit))

    assert len(page) == max(0, min(limit, total - offset))
    assert meta.has_more == (offset + limit < total)
    assert meta.total == total


def test_paginate_sorts_a_copy() -> None:
    source = list(reversed(_items(5)))
    page, _ = paginate(source, PageParams(offset=0, limit=3, sort="asc"))
    assert [item.id for item in page] == [1, 2, 3]
    assert [item.id for item in source] == [5, 4, 3, 2, 1]

    page, _ = paginate(source, PageParams(offset=1, limit=2, sort="desc"))
    assert [item.id for item in page] == [4, 3]


def test_parse_page_params_defaults_and_clamps() -> None:
    assert parse_page_params() == PageParams(offset=0, limit=10, sort="asc")
    assert parse_page_params("7", "20", "desc") == PageParams(offset=7, limit=20, sort="desc")
    assert parse_page_params("-5", "0", "DESC") == PageParams(offset=0, limit=1, sort="asc")
    assert parse_page_params("x", "1000", None) == PageParams(offset=0, limit=100, sort="asc")


def test_parse_page_params_reads_leading_integer_prefix() -> None:
    assert parse_page_params("10abc", "1.5") == PageParams(offset=10, limit=1, sort="asc")
    assert parse_page_params(" 3 ", "25items") == PageParams(offset=3, limit=25, sort="asc")
    assert parse_page_params("abc10", ".5") == PageParams(offset=0, limit=10, sort="asc")


def test_search_finds_article_by_title_substring() -> None:
    articles = sample_articles()
    for article in articles:
        needle = article.title[2:9].upper()
        assert article in search_articles(articles, needle)


def test_empty_search_returns_everything() -> None:
    articles = sample_articles()
    assert search_articles(articles, "") == articles
    assert search_articles(articles, "  \t") == articles
    assert search_articles(articles, None) == articles


def test_search_without_matches_is_empty() -> None:
    assert search_articles(sample_articles(), "cobol mainframes") == []


def test_make_excerpt_truncates_long_content() -> None:
    assert make_excerpt("a" * 150) == "a" * 150
    assert make_excerpt("a" * 151) == "a" * 150 + "..."
