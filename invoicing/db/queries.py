# invoicing/db/queries.py
"""
Read side of the dashboard: one function per query.

Every function binds user input as parameters, shapes rows into the view
models in invoicing/models, and turns any SQLAlchemy failure into a
DataFetchError carrying a generic message (the driver error is logged).
A missing row is not a failure: fetch_invoice_by_id returns None.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from sqlalchemy import String, case, cast, func, literal_column, or_, select
from sqlalchemy.exc import SQLAlchemyError

from invoicing.config import get_settings
from invoicing.db.engine import get_engine
from invoicing.db.schema import customers, invoices
from invoicing.errors import DataFetchError
from invoicing.models.customers import CustomerField, CustomersTableRow
from invoicing.models.dashboard import CardData, LatestInvoice, Revenue
from invoicing.models.invoices import InvoiceForm, InvoicesTableRow
from invoicing.pagination import (
    ITEMS_PER_PAGE,
    LATEST_INVOICES_LIMIT,
    page_offset,
    total_pages,
)

logger = logging.getLogger(__name__)


def _fail(function_name: str, message: str, exc: Exception) -> DataFetchError:
    logger.error("Database Error (%s): %s", function_name, exc)
    return DataFetchError(message)


def _sum_where_status(status: str):
    return func.coalesce(
        func.sum(case((invoices.c.status == status, invoices.c.amount), else_=0)),
        0,
    )


def _invoice_search(query: str):
    # % and _ in the query match literally (autoescape)
    return or_(
        customers.c.name.icontains(query, autoescape=True),
        customers.c.email.icontains(query, autoescape=True),
        cast(invoices.c.amount, String).icontains(query, autoescape=True),
        cast(invoices.c.date, String).icontains(query, autoescape=True),
        invoices.c.status.icontains(query, autoescape=True),
    )


# ---- Dashboard ----

def fetch_revenue() -> List[Revenue]:
    """
    Revenue per calendar month, aggregated from invoices, oldest month first.
    """
    # literal positions so GROUP BY repeats the exact select expression
    month = func.substr(
        cast(invoices.c.date, String), literal_column("1"), literal_column("7")
    ).label("month")
    stmt = (
        select(month, func.sum(invoices.c.amount).label("revenue"))
        .group_by(month)
        .order_by(month)
    )

    try:
        with get_engine().connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        raise _fail("fetch_revenue", "Failed to fetch revenue data.", exc)

    return [Revenue(month=row["month"], revenue=row["revenue"]) for row in rows]


def fetch_latest_invoices() -> List[LatestInvoice]:
    stmt = (
        select(
            invoices.c.id,
            invoices.c.amount,
            customers.c.name,
            customers.c.image_url,
            customers.c.email,
        )
        .select_from(invoices.join(customers))
        .order_by(invoices.c.date.desc(), invoices.c.id)
        .limit(LATEST_INVOICES_LIMIT)
    )

    try:
        with get_engine().connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        raise _fail("fetch_latest_invoices", "Failed to fetch the latest invoices.", exc)

    return [LatestInvoice(**row) for row in rows]


def _scalar(engine, stmt):
    with engine.connect() as conn:
        return conn.execute(stmt).one()


def fetch_card_data() -> CardData:
    """
    Dashboard counters. The three queries run concurrently; if any of them
    fails the whole fetch fails.
    """
    invoice_count = select(func.count()).select_from(invoices)
    customer_count = select(func.count()).select_from(customers)
    invoice_status = select(
        _sum_where_status("paid").label("paid"),
        _sum_where_status("pending").label("pending"),
    )

    engine = get_engine()
    workers = get_settings().card_data_workers
    try:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_scalar, engine, stmt)
                for stmt in (invoice_count, customer_count, invoice_status)
            ]
            invoice_row, customer_row, status_row = [f.result() for f in futures]
    except SQLAlchemyError as exc:
        raise _fail("fetch_card_data", "Failed to fetch card data.", exc)

    return CardData(
        number_of_invoices=invoice_row[0] or 0,
        number_of_customers=customer_row[0] or 0,
        total_paid_invoices=status_row.paid or 0,
        total_pending_invoices=status_row.pending or 0,
    )


# ---- Invoices ----

def fetch_filtered_invoices(query: str, current_page: int) -> List[InvoicesTableRow]:
    """
    One page (ITEMS_PER_PAGE rows) of invoices matching `query`, newest first.
    Pages past the end come back empty.
    """
    offset = page_offset(current_page)

    stmt = (
        select(
            invoices.c.id,
            invoices.c.customer_id,
            invoices.c.amount,
            invoices.c.date,
            invoices.c.status,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
        .order_by(invoices.c.date.desc(), invoices.c.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )

    try:
        with get_engine().connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        raise _fail("fetch_filtered_invoices", "Failed to fetch invoices.", exc)

    return [InvoicesTableRow(**row) for row in rows]


def fetch_invoices_pages(query: str) -> int:
    stmt = (
        select(func.count())
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
    )

    try:
        with get_engine().connect() as conn:
            count = conn.execute(stmt).scalar_one()
    except SQLAlchemyError as exc:
        raise _fail("fetch_invoices_pages", "Failed to fetch total number of invoices.", exc)

    return total_pages(count)


def fetch_invoice_by_id(invoice_id: str) -> Optional[InvoiceForm]:
    stmt = select(
        invoices.c.id,
        invoices.c.customer_id,
        invoices.c.amount,
        invoices.c.status,
    ).where(invoices.c.id == invoice_id)

    try:
        with get_engine().connect() as conn:
            row = conn.execute(stmt).mappings().first()
    except SQLAlchemyError as exc:
        raise _fail("fetch_invoice_by_id", "Failed to fetch invoice.", exc)

    if row is None:
        return None

    return InvoiceForm(
        id=row["id"],
        customer_id=row["customer_id"],
        amount=row["amount"],
        status=row["status"],
    )


# ---- Customers ----

def fetch_customers() -> List[CustomerField]:
    stmt = select(customers.c.id, customers.c.name).order_by(customers.c.name)

    try:
        with get_engine().connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        raise _fail("fetch_customers", "Failed to fetch all customers.", exc)

    return [CustomerField(id=row["id"], name=row["name"]) for row in rows]


def fetch_filtered_customers(query: str) -> List[CustomersTableRow]:
    """
    Customers whose name or email contains `query`, with invoice totals.
    """
    stmt = (
        select(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
            func.count(invoices.c.id).label("total_invoices"),
            _sum_where_status("pending").label("total_pending"),
            _sum_where_status("paid").label("total_paid"),
        )
        .select_from(customers.outerjoin(invoices))
        .where(
            or_(
                customers.c.name.icontains(query, autoescape=True),
                customers.c.email.icontains(query, autoescape=True),
            )
        )
        .group_by(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .order_by(customers.c.name)
    )

    try:
        with get_engine().connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        raise _fail("fetch_filtered_customers", "Failed to fetch customer table.", exc)

    return [CustomersTableRow(**row) for row in rows]
