from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from app.config import get_settings
from app.models.schemas import EchoResponse, ItemsResponse, RandomValue
from app.observability.middleware import get_request_id
from app.services.cache import TTLCache, get_cache
from app.services.demo_service import DemoService, generate_items, get_demo_service
from app.services.listing import paginate, parse_page_params

router = APIRouter(prefix="/api/demo", tags=["demo"])

logger = structlog.get_logger(__name__)

TEST_PAGINATION_TOTAL = 50


@router.get("/echo", response_model=EchoResponse)
def echo(
    x: str | None = Query(default=None, description="Echo parameter"),
    request_id: str | None = Depends(get_request_id),
) -> EchoResponse:
    return EchoResponse(request_id=request_id, x=x or None)


@router.get("/error")
def error(request_id: str | None = Depends(get_request_id)) -> None:
    logger.error("forced_error_requested")
    raise HTTPException(
        status_code=500,
        detail={
            "message": "Forced error for testing",
            "requestId": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@router.get("/random", response_model=RandomValue)
def random_value(
    q: str = Query(default="", description="Cache key parameter"),
    cache: TTLCache = Depends(get_cache),
    service: DemoService = Depends(get_demo_service),
) -> RandomValue:
    cache_key = f"rnd:{q}"
    cached = cache.get(cache_key)
    if cached is not None:
        logger.info("random_cache_hit", q=q)
        return cached

    fresh = service.compute(q)
    cache.set(cache_key, fresh, ttl_seconds=get_settings().random_cache_ttl_seconds)
    logger.info("random_cache_miss", q=q, hits=fresh.hits)
    return fresh


def _items_response(
    request_id: str | None,
    total: int,
    offset: str | None,
    limit: str | None,
    sort: str | None,
) -> ItemsResponse:
    params = parse_page_params(offset, limit, sort)
    logger.info("items_requested", offset=params.offset, limit=params.limit, sort=params.sort)
    items, pagination = paginate(generate_items(total), params)
    return ItemsResponse(request_id=request_id, items=items, pagination=pagination)


@router.get("/items", response_model=ItemsResponse)
def get_items(
    offset: str | None = Query(default=None, description="Items to skip"),
    limit: str | None = Query(default=None, description="Items to return (1-100)"),
    sort: str | None = Query(default=None, description="Sort order: asc or desc"),
    request_id: str | None = Depends(get_request_id),
) -> ItemsResponse:
    return _items_response(request_id, get_settings().demo_items_total, offset, limit, sort)


@router.get("/test-pagination", response_model=ItemsResponse)
def test_pagination(
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    request_id: str | None = Depends(get_request_id),
) -> ItemsResponse:
    return _items_response(request_id, TEST_PAGINATION_TOTAL, offset, limit, sort)
