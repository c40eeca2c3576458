# invoicing/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    Date, ForeignKey, CheckConstraint, Text
)

metadata = MetaData()

customers = Table(
    "customers",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("image_url", Text, nullable=False),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("customer_id", String(36), ForeignKey("customers.id"), nullable=False),
    # integer cents; see invoicing/currency.py for display conversion
    Column("amount", Integer, nullable=False),
    Column("status", String(16), nullable=False),
    Column("date", Date, nullable=False),
    CheckConstraint("amount >= 0", name="ck_invoices_amount_nonneg"),
    CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status_enum"),
)
