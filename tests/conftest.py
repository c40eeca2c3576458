"""Shared fixtures: a throwaway sqlite store per test."""

import datetime

import pytest

from invoicing.config import get_settings
from invoicing.db.engine import get_engine
from invoicing.db.schema import customers, invoices, metadata

EVIL_RABBIT = "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"
DELBA = "3958dc9e-712f-4377-85e9-fec4b6a6442a"
LEE = "3958dc9e-742f-4377-85e9-fec4b6a6442a"
AMY = "cc27c14a-0acf-4f4a-a6c9-d45682c144b9"

CUSTOMERS = [
    {"id": EVIL_RABBIT, "name": "Evil Rabbit", "email": "evil@rabbit.com",
     "image_url": "/customers/evil-rabbit.png"},
    {"id": DELBA, "name": "Delba de Oliveira", "email": "delba@oliveira.com",
     "image_url": "/customers/delba-de-oliveira.png"},
    {"id": LEE, "name": "Lee Robinson", "email": "lee@robinson.com",
     "image_url": "/customers/lee-robinson.png"},
    # no invoices
    {"id": AMY, "name": "Amy Burns", "email": "amy@burns.com",
     "image_url": "/customers/amy-burns.png"},
]

INVOICES = [
    {"id": "inv-01", "customer_id": EVIL_RABBIT, "amount": 15795, "status": "pending",
     "date": datetime.date(2022, 12, 6)},
    {"id": "inv-02", "customer_id": DELBA, "amount": 20348, "status": "pending",
     "date": datetime.date(2022, 11, 14)},
    {"id": "inv-03", "customer_id": LEE, "amount": 3040, "status": "paid",
     "date": datetime.date(2022, 10, 29)},
    {"id": "inv-04", "customer_id": LEE, "amount": 44800, "status": "paid",
     "date": datetime.date(2023, 9, 10)},
    {"id": "inv-05", "customer_id": EVIL_RABBIT, "amount": 666, "status": "pending",
     "date": datetime.date(2023, 6, 27)},
    {"id": "inv-06", "customer_id": DELBA, "amount": 1250, "status": "paid",
     "date": datetime.date(2023, 6, 17)},
    {"id": "inv-07", "customer_id": LEE, "amount": 32545, "status": "paid",
     "date": datetime.date(2023, 6, 9)},
]


def _point_at(monkeypatch, path):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{path}")
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture
def engine(tmp_path, monkeypatch):
    _point_at(monkeypatch, tmp_path / "test.db")
    engine = get_engine()
    metadata.create_all(engine)
    yield engine
    engine.dispose()
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture
def seeded(engine):
    with engine.begin() as conn:
        conn.execute(customers.insert(), CUSTOMERS)
        conn.execute(invoices.insert(), INVOICES)
    return engine


@pytest.fixture
def broken_store(tmp_path, monkeypatch):
    """A reachable database with no tables: every query fails."""
    _point_at(monkeypatch, tmp_path / "empty.db")
    yield get_engine()
    get_engine().dispose()
    get_settings.cache_clear()
    get_engine.cache_clear()
