# invoicing/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from invoicing.api.customers import router as customers_router
from invoicing.api.dashboard import router as dashboard_router
from invoicing.api.error_handlers import register_error_handlers
from invoicing.api.invoices import router as invoices_router
from invoicing.config import get_settings, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings().log_level)
    logger.info("Invoicing dashboard API started")
    yield
    logger.info("Invoicing dashboard API shutting down")


app = FastAPI(
    title="Invoicing Dashboard API",
    version="0.1.0",
    lifespan=lifespan,
)

@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(dashboard_router)
app.include_router(customers_router)
app.include_router(invoices_router)

register_error_handlers(app)
