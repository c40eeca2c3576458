# invoicing/api/dashboard.py

from typing import List

from fastapi import APIRouter

from invoicing.db.queries import fetch_card_data, fetch_latest_invoices, fetch_revenue
from invoicing.models.dashboard import CardData, LatestInvoice, Revenue

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/revenue", response_model=List[Revenue])
def revenue() -> List[Revenue]:
    """
    Revenue per month for the dashboard chart.
    """
    return fetch_revenue()


@router.get("/latest-invoices", response_model=List[LatestInvoice])
def latest_invoices() -> List[LatestInvoice]:
    return fetch_latest_invoices()


@router.get("/cards", response_model=CardData)
def cards() -> CardData:
    """
    Invoice/customer counts and paid/pending totals.
    """
    return fetch_card_data()
