from __future__ import annotations

from collections.abc import Generator

from fastapi import HTTPException
from services.api.app.db.database import db_session
from services.api.app.services.cart_registry import CartRegistry, carts
from services.api.app.services.payment_base import PaymentAdapter
from services.api.app.services.payment_factory import get_payment_adapter
from sqlalchemy.orm import Session


def get_db() -> Generator[Session, None, None]:
    db = db_session()
    try:
        yield db
    finally:
        db.close()


def get_carts() -> CartRegistry:
    return carts


def get_payments() -> PaymentAdapter:
    try:
        return get_payment_adapter()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
