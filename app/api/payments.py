from __future__ import annotations

import uuid
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Body, Depends, Header

from app.api.errors import api_error
from app.config import get_settings
from app.models.schemas import ClearedResponse, Payment, PaymentCreate, PaymentsDebugResponse
from app.services.idempotency import IdempotencyStore, MissingIdempotencyKeyError, get_payments_store

router = APIRouter(prefix="/api/payments", tags=["payments"])

logger = structlog.get_logger(__name__)


def _new_payment(payload: PaymentCreate, idempotency_key: str) -> Payment:
    return Payment(
        payment_id=uuid.uuid4().hex[:12],
        amount=payload.amount if payload.amount is not None else 0,
        status="success",
        timestamp=datetime.now(timezone.utc).isoformat(),
        idempotency_key=idempotency_key,
    )


@router.post("", response_model=Payment, status_code=201)
def create_payment(
    payload: PaymentCreate | None = Body(default=None),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    store: IdempotencyStore = Depends(get_payments_store),
) -> Payment:
    body = payload or PaymentCreate()
    try:
        payment, created = store.get_or_create(idempotency_key, lambda: _new_payment(body, idempotency_key))
    except MissingIdempotencyKeyError as exc:
        raise api_error(400, "Missing Idempotency-Key", str(exc)) from exc

    logger.info("payment_processed", payment_id=payment.payment_id, replayed=not created)
    return payment


def _require_debug() -> None:
    if not get_settings().enable_payments_debug:
        raise api_error(404, "Not found", "Not found")


@router.post("/debug/all", response_model=PaymentsDebugResponse, dependencies=[Depends(_require_debug)])
def get_all_stored_payments(store: IdempotencyStore = Depends(get_payments_store)) -> PaymentsDebugResponse:
    payments = store.all()
    return PaymentsDebugResponse(count=len(payments), payments=payments)


@router.post("/debug/clear", response_model=ClearedResponse, dependencies=[Depends(_require_debug)])
def clear_all_payments(store: IdempotencyStore = Depends(get_payments_store)) -> ClearedResponse:
    count = store.clear()
    logger.info("payments_cleared", count=count)
    return ClearedResponse(message=f"Cleared {count} stored payments", count=count)
