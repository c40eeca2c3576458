# scripts/ingest.py

import csv
import logging
from datetime import datetime

from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from invoicing.config import get_settings, setup_logging
from invoicing.currency import parse_currency
from invoicing.db.engine import get_engine
from invoicing.db.schema import customers, invoices

logger = logging.getLogger(__name__)

CUSTOMERS_PATH = "data/customers.csv"
INVOICES_PATH = "data/invoices.csv"

STATUSES = {"pending", "paid"}

MAX_ERROR_EXAMPLES = 5


# ---- Helpers ----

def parse_required(value, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value


# same type the read models declare, so every loaded row can be served back
_email_adapter = TypeAdapter(EmailStr)


def parse_email(value: str) -> str:
    email = parse_required(value, "email")
    try:
        return _email_adapter.validate_python(email)
    except ValidationError:
        raise ValueError(f"not a valid email address: {email!r}")


def parse_amount(value: str) -> int:
    cents = parse_currency(value or "")
    if cents < 0:
        raise ValueError(f"amount must be non-negative, got {value!r}")
    return cents


def parse_status(value: str) -> str:
    status = (value or "").strip().lower()
    if status not in STATUSES:
        raise ValueError(f"status must be one of {sorted(STATUSES)}, got {value!r}")
    return status


def parse_invoice_date(value: str):
    return datetime.strptime(parse_required(value, "date"), "%Y-%m-%d").date()


def _insert_for(conn, table):
    """Dialect-specific INSERT that supports ON CONFLICT DO UPDATE."""
    if conn.dialect.name == "postgresql":
        return postgresql_insert(table)
    if conn.dialect.name == "sqlite":
        return sqlite_insert(table)
    raise NotImplementedError(f"upsert not supported for dialect {conn.dialect.name!r}")


def upsert_customer(conn, customer_row: dict) -> None:
    stmt = _insert_for(conn, customers).values(**customer_row)
    stmt = stmt.on_conflict_do_update(
        index_elements=[customers.c.id],
        set_={
            "name": stmt.excluded.name,
            "email": stmt.excluded.email,
            "image_url": stmt.excluded.image_url,
        },
    )
    conn.execute(stmt)


def upsert_invoice(conn, invoice_row: dict) -> None:
    """
    Insert or update an invoice by id (idempotent ingest).

    invoice_row: dict mapping column names to values, e.g.
      {
        "id": "0b4fa1f3-...",
        "customer_id": "d6e15727-...",
        "amount": 15795,
        "status": "pending",
        "date": date(2022, 12, 6),
      }
    """
    stmt = _insert_for(conn, invoices).values(**invoice_row)
    stmt = stmt.on_conflict_do_update(
        index_elements=[invoices.c.id],
        set_={
            "customer_id": stmt.excluded.customer_id,
            "amount": stmt.excluded.amount,
            "status": stmt.excluded.status,
            "date": stmt.excluded.date,
        },
    )
    conn.execute(stmt)


def _record_error(stats: dict, source: str, row_number: int, row: dict, exc: Exception) -> None:
    stats["n_errors"] += 1
    if len(stats["error_examples"]) < MAX_ERROR_EXAMPLES:
        stats["error_examples"].append(
            {
                "source": source,
                "row_number": row_number,
                "row": dict(row),
                "error": repr(exc),
            }
        )


def _record_duplicate(stats: dict, source: str, row_number: int, row_id: str) -> None:
    stats["n_duplicates"] += 1
    if len(stats["duplicate_examples"]) < MAX_ERROR_EXAMPLES:
        stats["duplicate_examples"].append(
            f"Duplicate id {row_id!r} in {source} at CSV row {row_number}"
        )


def _empty_stats() -> dict:
    return {
        "n_rows": 0,
        "n_customers": 0,
        "n_invoices": 0,
        "n_errors": 0,
        "error_examples": [],
        "n_duplicates": 0,
        "duplicate_examples": [],
    }


def parse_customers_csv(file_path: str, stats: dict) -> list:
    customers_by_id = {}

    with open(file_path, newline="") as f:
        reader = csv.DictReader(f)

        for row_number, row in enumerate(reader, start=1):
            stats["n_rows"] += 1
            try:
                customer_id = parse_required(row.get("id"), "id")
                record = {
                    "id": customer_id,
                    "name": parse_required(row.get("name"), "name"),
                    "email": parse_email(row.get("email")),
                    "image_url": parse_required(row.get("image_url"), "image_url"),
                }
            except ValueError as exc:
                _record_error(stats, file_path, row_number, row, exc)
                continue

            # last occurrence wins, same as the upsert would do
            if customer_id in customers_by_id:
                _record_duplicate(stats, file_path, row_number, customer_id)
            customers_by_id[customer_id] = record

    return list(customers_by_id.values())


def parse_invoices_csv(file_path: str, stats: dict, known_customer_ids=None) -> list:
    invoices_by_id = {}

    with open(file_path, newline="") as f:
        reader = csv.DictReader(f)

        for row_number, row in enumerate(reader, start=1):
            stats["n_rows"] += 1
            try:
                invoice_id = parse_required(row.get("id"), "id")
                customer_id = parse_required(row.get("customer_id"), "customer_id")
                if known_customer_ids is not None and customer_id not in known_customer_ids:
                    raise ValueError(f"unknown customer_id {customer_id!r}")
                record = {
                    "id": invoice_id,
                    "customer_id": customer_id,
                    "amount": parse_amount(row.get("amount")),
                    "status": parse_status(row.get("status")),
                    "date": parse_invoice_date(row.get("date")),
                }
            except ValueError as exc:
                _record_error(stats, file_path, row_number, row, exc)
                continue

            if invoice_id in invoices_by_id:
                _record_duplicate(stats, file_path, row_number, invoice_id)
            invoices_by_id[invoice_id] = record

    return list(invoices_by_id.values())


def parse_seed_data(customers_path: str = CUSTOMERS_PATH, invoices_path: str = INVOICES_PATH):
    stats = _empty_stats()

    customers_list = parse_customers_csv(customers_path, stats)
    known_ids = {c["id"] for c in customers_list}
    invoices_list = parse_invoices_csv(invoices_path, stats, known_customer_ids=known_ids)

    stats["n_customers"] = len(customers_list)
    stats["n_invoices"] = len(invoices_list)
    return customers_list, invoices_list, stats


def load_into_db(customers_list, invoices_list):
    engine = get_engine()
    with engine.begin() as conn:
        # customers first so invoice foreign keys resolve
        for customer in customers_list:
            upsert_customer(conn, customer)
        for inv in invoices_list:
            upsert_invoice(conn, inv)


def log_stats(stats: dict) -> None:
    logger.info("Total CSV rows read:   %s", stats["n_rows"])
    logger.info("Customers parsed:      %s", stats["n_customers"])
    logger.info("Invoices parsed:       %s", stats["n_invoices"])
    logger.info("Rows with errors:      %s", stats["n_errors"])
    logger.info("Duplicate ids:         %s", stats["n_duplicates"])
    for example in stats["duplicate_examples"]:
        logger.warning("Duplicate example: %s", example)

    if stats["error_examples"]:
        logger.warning("Example errors:")
        for ex in stats["error_examples"]:
            logger.warning("%s row %s: %s", ex["source"], ex["row_number"], ex["error"])


def main():
    setup_logging(get_settings().log_level)
    customers_list, invoices_list, stats = parse_seed_data()
    load_into_db(customers_list, invoices_list)
    log_stats(stats)


if __name__ == "__main__":
    main()
