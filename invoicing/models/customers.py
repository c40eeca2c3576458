# invoicing/models/customers.py

from pydantic import BaseModel, ConfigDict, EmailStr, computed_field

from invoicing.currency import format_currency


class CustomerField(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class CustomersTableRow(BaseModel):
    id: str
    name: str
    email: EmailStr
    image_url: str
    total_invoices: int
    total_pending: int
    total_paid: int

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def total_pending_formatted(self) -> str:
        return format_currency(self.total_pending)

    @computed_field
    @property
    def total_paid_formatted(self) -> str:
        return format_currency(self.total_paid)
