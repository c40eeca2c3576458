# invoicing/models/invoices.py

import datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field

from invoicing.currency import MAX_AMOUNT, format_amount, format_currency

InvoiceStatus = Literal["pending", "paid"]


class InvoicesTableRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: EmailStr
    image_url: str
    date: datetime.date
    amount: int
    status: InvoiceStatus

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def amount_formatted(self) -> str:
        return format_currency(self.amount)


class InvoiceForm(BaseModel):
    """An invoice as loaded into the edit form."""

    id: str
    customer_id: str
    amount: int
    status: InvoiceStatus

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def amount_display(self) -> str:
        return format_amount(self.amount)


class InvoicePage(BaseModel):
    items: List[InvoicesTableRow]
    query: str
    page: int
    total_pages: int
    pagination: List[Union[int, str]]


# ---- Form schemas ----

class InvoiceDraft(BaseModel):
    """
    Fields a user submits on the create and edit forms.

    Form keys use the camelCase names the browser sends (customerId);
    amount arrives as text in dollars and is coerced to a Decimal.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, decimal_places=2)
    status: InvoiceStatus


class InvoiceFormSchema(InvoiceDraft):
    id: str
    date: str


# Create and update accept exactly the same fields; id and date are
# server-generated (create) or taken from the URL (update).
CreateInvoice = InvoiceDraft
UpdateInvoice = InvoiceDraft


class ActionState(BaseModel):
    message: Optional[str] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)
