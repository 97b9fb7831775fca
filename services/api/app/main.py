"""Tavola API service entrypoint."""

import logging
import os

from fastapi import FastAPI

from services.api.app.db.init_db import init_db
from services.api.app.routers.admin import router as admin_router
from services.api.app.routers.cart import router as cart_router
from services.api.app.routers.checkout import router as checkout_router
from services.api.app.routers.menu import router as menu_router
from services.api.app.routers.orders import router as orders_router

logging.basicConfig(
    level=os.getenv("TAVOLA_LOG_LEVEL", "INFO").strip().upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Tavola API")

app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(orders_router)
app.include_router(admin_router)


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
