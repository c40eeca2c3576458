# invoicing/models/dashboard.py

from pydantic import BaseModel, EmailStr, computed_field

from invoicing.currency import format_currency


class Revenue(BaseModel):
    month: str  # YYYY-MM
    revenue: int

    @computed_field
    @property
    def revenue_formatted(self) -> str:
        return format_currency(self.revenue)


class LatestInvoice(BaseModel):
    id: str
    name: str
    email: EmailStr
    image_url: str
    amount: int

    @computed_field
    @property
    def amount_formatted(self) -> str:
        return format_currency(self.amount)


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: int
    total_pending_invoices: int

    @computed_field
    @property
    def total_paid_invoices_formatted(self) -> str:
        return format_currency(self.total_paid_invoices)

    @computed_field
    @property
    def total_pending_invoices_formatted(self) -> str:
        return format_currency(self.total_pending_invoices)
