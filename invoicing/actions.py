# invoicing/actions.py
"""
Form-bound write actions for invoices.

create/update return None when the write went through (the caller then
redirects to the invoice list) or an ActionState describing what to show
back on the form. Validation failures never raise.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from invoicing.currency import MAX_CENTS, format_currency, to_cents
from invoicing.db.engine import get_engine
from invoicing.db.schema import invoices
from invoicing.errors import InvoiceNotFoundError
from invoicing.models.invoices import ActionState, CreateInvoice, UpdateInvoice

logger = logging.getLogger(__name__)

INVOICES_PATH = "/invoices"
DELETED_MESSAGE = "Deleted Invoice."

FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

# messages for a specific (field, error type) pair
ERROR_TYPE_MESSAGES = {
    ("amount", "less_than_equal"): (
        f"Please enter an amount no greater than {format_currency(MAX_CENTS)}."
    ),
}


def field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Collapse pydantic errors into {form field: [user-facing message]}."""
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        message = ERROR_TYPE_MESSAGES.get(
            (field, err["type"]), FIELD_MESSAGES.get(field, err["msg"])
        )
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def _unknown_customer(verb: str) -> ActionState:
    # the only constraint a validated draft can still break is the customer FK
    return ActionState(
        message=f"Invalid Fields. Failed to {verb} Invoice.",
        errors={"customerId": [FIELD_MESSAGES["customerId"]]},
    )


def create_invoice(form_data: Mapping[str, Any]) -> Optional[ActionState]:
    try:
        draft = CreateInvoice.model_validate(dict(form_data))
    except ValidationError as exc:
        logger.info("Rejected invoice form: %s", exc.errors())
        return ActionState(
            message="Missing Fields. Failed to Create Invoice.",
            errors=field_errors(exc),
        )

    invoice_id = str(uuid4())
    values = {
        "id": invoice_id,
        "customer_id": draft.customer_id,
        "amount": to_cents(draft.amount),
        "status": draft.status,
        "date": date.today(),
    }

    try:
        with get_engine().begin() as conn:
            conn.execute(invoices.insert().values(**values))
    except IntegrityError as exc:
        logger.info("Rejected invoice for customer %s: %s", draft.customer_id, exc)
        return _unknown_customer("Create")
    except SQLAlchemyError as exc:
        logger.error("Database Error (create_invoice): %s", exc)
        return ActionState(message="Database Error: Failed to Create Invoice.")

    logger.info("Created invoice %s", invoice_id)
    return None


def update_invoice(invoice_id: str, form_data: Mapping[str, Any]) -> Optional[ActionState]:
    """Full-record update; raises InvoiceNotFoundError if `invoice_id` is unknown."""
    try:
        draft = UpdateInvoice.model_validate(dict(form_data))
    except ValidationError as exc:
        logger.info("Rejected invoice form for %s: %s", invoice_id, exc.errors())
        return ActionState(
            message="Missing Fields. Failed to Update Invoice.",
            errors=field_errors(exc),
        )

    stmt = (
        invoices.update()
        .where(invoices.c.id == invoice_id)
        .values(
            customer_id=draft.customer_id,
            amount=to_cents(draft.amount),
            status=draft.status,
        )
    )

    try:
        with get_engine().begin() as conn:
            result = conn.execute(stmt)
            if result.rowcount == 0:
                raise InvoiceNotFoundError(invoice_id)
    except IntegrityError as exc:
        logger.info("Rejected invoice %s for customer %s: %s", invoice_id, draft.customer_id, exc)
        return _unknown_customer("Update")
    except SQLAlchemyError as exc:
        logger.error("Database Error (update_invoice): %s", exc)
        return ActionState(message="Database Error: Failed to Update Invoice.")

    logger.info("Updated invoice %s", invoice_id)
    return None


def delete_invoice(invoice_id: str) -> ActionState:
    try:
        with get_engine().begin() as conn:
            result = conn.execute(invoices.delete().where(invoices.c.id == invoice_id))
            if result.rowcount == 0:
                raise InvoiceNotFoundError(invoice_id)
    except SQLAlchemyError as exc:
        logger.error("Database Error (delete_invoice): %s", exc)
        return ActionState(message="Database Error: Failed to Delete Invoice.")

    logger.info("Deleted invoice %s", invoice_id)
    return ActionState(message=DELETED_MESSAGE)
