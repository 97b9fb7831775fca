from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from services.api.app.db.deps import get_carts, get_db, get_payments
from services.api.app.models.checkout import CheckoutRequest
from services.api.app.models.order import OrderOut
from services.api.app.services.cart_registry import CartRegistry
from services.api.app.services.orders import EmptyCartError, order_to_out, place_order
from services.api.app.services.payment_base import (
    PaymentAdapter,
    PaymentAdapterError,
    PaymentDeclinedError,
    PaymentValidationError,
)
from sqlalchemy.orm import Session

router = APIRouter()


def _raise_payment_http_error(e: Exception) -> None:
    if isinstance(e, PaymentValidationError):
        raise HTTPException(status_code=422, detail=str(e)) from e

    if isinstance(e, PaymentDeclinedError):
        raise HTTPException(status_code=402, detail=str(e)) from e

    if isinstance(e, PaymentAdapterError):
        raise HTTPException(status_code=502, detail=str(e)) from e

    raise HTTPException(status_code=500, detail="Internal Server Error") from e


@router.post("/v1/checkout", response_model=OrderOut, status_code=201)
def checkout(
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    carts: CartRegistry = Depends(get_carts),
    payments: PaymentAdapter = Depends(get_payments),
) -> OrderOut:
    cart = carts.get(payload.client_id)
    try:
        order = place_order(db, cart, payload, payments)
    except EmptyCartError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except Exception as e:
        db.rollback()
        _raise_payment_http_error(e)

    return order_to_out(order)
