from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query

from app.api.errors import api_error
from app.db.models import User
from app.models.schemas import (
    ArticleCreate,
    ArticleCreatedResponse,
    ArticleListResponse,
    ArticleResponse,
    ArticleSummary,
)
from app.observability.middleware import get_request_id
from app.services.article_service import ArticleStore, get_article_store
from app.services.auth_dependencies import get_current_user

router = APIRouter(prefix="/api/articles", tags=["articles"])

logger = structlog.get_logger(__name__)


@router.post("", response_model=ArticleCreatedResponse, status_code=201)
def create_article(
    payload: ArticleCreate,
    request_id: str | None = Depends(get_request_id),
    store: ArticleStore = Depends(get_article_store),
    user: User = Depends(get_current_user),
) -> ArticleCreatedResponse:
    logger.info("article_create_requested", title=payload.title, user_id=str(user.id))

    if not (payload.title and payload.content and payload.author):
        raise api_error(400, "Bad request", "Title, content, and author are required")

    article = store.create(
        title=payload.title,
        content=payload.content,
        author=payload.author,
        tags=payload.tags,
    )
    return ArticleCreatedResponse(request_id=request_id, article=article, message="Article created successfully")


@router.get("", response_model=ArticleListResponse)
def list_articles(
    search: str = Query(default="", description="Search term for titles, content, authors and tags"),
    request_id: str | None = Depends(get_request_id),
    store: ArticleStore = Depends(get_article_store),
) -> ArticleListResponse:
    articles = store.list_articles(search)
    logger.info("articles_listed", search=search, total=len(articles))

    summaries = [ArticleSummary(**article.model_dump(exclude={"content"})) for article in articles]
    return ArticleListResponse(
        request_id=request_id,
        articles=summaries,
        total=len(summaries),
        search_term=search,
    )


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(
    article_id: int,
    request_id: str | None = Depends(get_request_id),
    store: ArticleStore = Depends(get_article_store),
) -> ArticleResponse:
    article = store.get(article_id)
    if article is None:
        logger.info("article_not_found", article_id=article_id)
        raise api_error(404, "Article not found", f"Article with ID {article_id} does not exist")
    return ArticleResponse(request_id=request_id, article=article)
