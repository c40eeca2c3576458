# invoicing/api/invoices.py

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, status
from fastapi.responses import JSONResponse, RedirectResponse

from invoicing import actions
from invoicing.db.queries import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from invoicing.models.invoices import ActionState, InvoiceForm, InvoicePage
from invoicing.pagination import generate_pagination

router = APIRouter(prefix="/invoices", tags=["invoices"])


class InvoiceSearchParams:
    """Search box text and 1-indexed page, validated once at the boundary."""

    def __init__(
        self,
        query: str = Query("", description="Matches customer name/email, amount, date or status"),
        page: int = Query(1, ge=1, description="1-indexed page number"),
    ):
        self.query = query
        self.page = page


def _form_data(customer_id, amount, invoice_status) -> dict:
    fields = {"customerId": customer_id, "amount": amount, "status": invoice_status}
    return {key: value for key, value in fields.items() if value is not None}


def _state_response(state: ActionState) -> JSONResponse:
    # field errors are the user's to fix; a bare message means the store failed
    code = status.HTTP_400_BAD_REQUEST if state.errors else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=code, content=state.model_dump())


def _redirect_to_list() -> RedirectResponse:
    return RedirectResponse(url=actions.INVOICES_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_model=InvoicePage)
def list_invoices(params: InvoiceSearchParams = Depends()) -> InvoicePage:
    """
    One page of the invoice table plus the page links to render under it.
    """
    items = fetch_filtered_invoices(params.query, params.page)
    pages = fetch_invoices_pages(params.query)

    return InvoicePage(
        items=items,
        query=params.query,
        page=params.page,
        total_pages=pages,
        pagination=generate_pagination(params.page, pages),
    )


@router.get("/pages")
def invoice_pages(query: str = Query("")) -> dict:
    return {"total_pages": fetch_invoices_pages(query)}


@router.post("/")
def create_invoice(
    customer_id: Optional[str] = Form(None, alias="customerId"),
    amount: Optional[str] = Form(None),
    invoice_status: Optional[str] = Form(None, alias="status"),
):
    state = actions.create_invoice(_form_data(customer_id, amount, invoice_status))
    if state is not None:
        return _state_response(state)
    return _redirect_to_list()


@router.get("/{invoice_id}", response_model=InvoiceForm)
def get_invoice(invoice_id: str) -> InvoiceForm:
    invoice = fetch_invoice_by_id(invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.get("/{invoice_id}/edit")
def edit_invoice(invoice_id: str) -> dict:
    """
    Everything the edit form needs: the invoice and the customer choices.
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        invoice_future = pool.submit(fetch_invoice_by_id, invoice_id)
        customers_future = pool.submit(fetch_customers)
        invoice = invoice_future.result()
        customers = customers_future.result()

    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return {
        "invoice": invoice.model_dump(),
        "customers": [c.model_dump() for c in customers],
    }


@router.put("/{invoice_id}")
def update_invoice(
    invoice_id: str,
    customer_id: Optional[str] = Form(None, alias="customerId"),
    amount: Optional[str] = Form(None),
    invoice_status: Optional[str] = Form(None, alias="status"),
):
    state = actions.update_invoice(invoice_id, _form_data(customer_id, amount, invoice_status))
    if state is not None:
        return _state_response(state)
    return _redirect_to_list()


@router.delete("/{invoice_id}", response_model=ActionState)
def delete_invoice(invoice_id: str):
    state = actions.delete_invoice(invoice_id)
    if state.message != actions.DELETED_MESSAGE:
        return _state_response(state)
    return state
