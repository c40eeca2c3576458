# invoicing/api/error_handlers.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from invoicing.errors import DataFetchError, InvoiceNotFoundError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DataFetchError)
    async def data_fetch_error_handler(request: Request, exc: DataFetchError):
        # driver details were logged where the error was raised
        logger.error("Data fetch failed on %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": exc.message},
        )

    @app.exception_handler(InvoiceNotFoundError)
    async def invoice_not_found_handler(request: Request, exc: InvoiceNotFoundError):
        logger.warning("Invoice %s not found on %s", exc.invoice_id, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Invoice not found"},
        )
