# invoicing/api/customers.py

from typing import List

from fastapi import APIRouter, Query

from invoicing.db.queries import fetch_customers, fetch_filtered_customers
from invoicing.models.customers import CustomerField, CustomersTableRow

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/", response_model=List[CustomersTableRow])
def list_customers(
    query: str = Query("", description="Case-insensitive substring of name or email"),
) -> List[CustomersTableRow]:
    """
    Customer table with per-customer invoice count and paid/pending totals.
    """
    return fetch_filtered_customers(query)


@router.get("/fields", response_model=List[CustomerField])
def customer_fields() -> List[CustomerField]:
    """
    Id/name pairs for the customer select on the invoice forms.
    """
    return fetch_customers()
