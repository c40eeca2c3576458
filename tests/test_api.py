import pytest
from fastapi.testclient import TestClient

from invoicing.main import app

from conftest import DELBA, LEE


@pytest.fixture
def client(seeded):
    with TestClient(app) as client:
        yield client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


# ---- Dashboard ----

def test_dashboard_cards(client):
    body = client.get("/dashboard/cards").json()
    assert body["number_of_invoices"] == 7
    assert body["number_of_customers"] == 4
    assert body["total_pending_invoices_formatted"] == "$368.09"


def test_dashboard_revenue_and_latest(client):
    revenue = client.get("/dashboard/revenue").json()
    assert revenue[0] == {"month": "2022-10", "revenue": 3040, "revenue_formatted": "$30.40"}

    latest = client.get("/dashboard/latest-invoices").json()
    assert len(latest) == 5
    assert latest[0]["name"] == "Lee Robinson"


def test_store_failure_is_a_generic_500(broken_store):
    with TestClient(app) as client:
        response = client.get("/dashboard/revenue")
    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to fetch revenue data."}


# ---- Invoices: reads ----

def test_list_invoices_page(client):
    body = client.get("/invoices/", params={"query": "", "page": 2}).json()
    assert body["page"] == 2
    assert body["total_pages"] == 2
    assert body["pagination"] == [1, 2]
    assert [item["id"] for item in body["items"]] == ["inv-03"]


def test_list_invoices_search(client):
    body = client.get("/invoices/", params={"query": "robinson"}).json()
    assert {item["id"] for item in body["items"]} == {"inv-03", "inv-04", "inv-07"}
    assert body["total_pages"] == 1


def test_list_invoices_rejects_bad_page(client):
    assert client.get("/invoices/", params={"page": 0}).status_code == 422
    assert client.get("/invoices/", params={"page": "two"}).status_code == 422


def test_invoice_pages(client):
    assert client.get("/invoices/pages").json() == {"total_pages": 2}


def test_get_invoice(client):
    body = client.get("/invoices/inv-04").json()
    assert body == {
        "id": "inv-04",
        "customer_id": LEE,
        "amount": 44800,
        "status": "paid",
        "amount_display": "448.00",
    }


def test_get_missing_invoice_is_404(client):
    response = client.get("/invoices/nope")
    assert response.status_code == 404
    assert response.json() == {"detail": "Invoice not found"}


def test_edit_view_bundles_invoice_and_customers(client):
    body = client.get("/invoices/inv-04/edit").json()
    assert body["invoice"]["id"] == "inv-04"
    assert [c["name"] for c in body["customers"]][0] == "Amy Burns"

    assert client.get("/invoices/nope/edit").status_code == 404


# ---- Invoices: form actions ----

def test_create_invoice_redirects_to_list(client):
    response = client.post(
        "/invoices/",
        data={"customerId": DELBA, "amount": "19.99", "status": "pending"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/invoices"
    assert client.get("/dashboard/cards").json()["number_of_invoices"] == 8


def test_create_invoice_validation_failure(client):
    response = client.post("/invoices/", data={"customerId": DELBA, "amount": "x", "status": "paid"})
    assert response.status_code == 400
    assert response.json() == {
        "message": "Missing Fields. Failed to Create Invoice.",
        "errors": {"amount": ["Please enter an amount greater than $0."]},
    }


def test_create_invoice_for_unknown_customer(client):
    response = client.post("/invoices/", data={"customerId": "nobody", "amount": "1", "status": "paid"})
    assert response.status_code == 400
    assert response.json()["errors"] == {"customerId": ["Please select a customer."]}


def test_create_invoice_amount_too_large(client):
    response = client.post(
        "/invoices/",
        data={"customerId": DELBA, "amount": "100000000000000000", "status": "paid"},
    )
    assert response.status_code == 400
    assert list(response.json()["errors"]) == ["amount"]
    assert client.get("/dashboard/cards").json()["number_of_invoices"] == 7


def test_create_invoice_store_failure(broken_store):
    with TestClient(app) as client:
        response = client.post("/invoices/", data={"customerId": DELBA, "amount": "1", "status": "paid"})
    assert response.status_code == 500
    assert response.json()["message"] == "Database Error: Failed to Create Invoice."


def test_update_invoice(client):
    response = client.put(
        "/invoices/inv-01",
        data={"customerId": LEE, "amount": "200", "status": "paid"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    body = client.get("/invoices/inv-01").json()
    assert body["customer_id"] == LEE
    assert body["amount"] == 20000


def test_update_invoice_validation_failure(client):
    response = client.put("/invoices/inv-01", data={"customerId": LEE, "amount": "5", "status": "late"})
    assert response.status_code == 400
    assert response.json()["errors"] == {"status": ["Please select an invoice status."]}


def test_update_missing_invoice_is_404(client):
    response = client.put("/invoices/nope", data={"customerId": LEE, "amount": "5", "status": "paid"})
    assert response.status_code == 404


def test_delete_invoice(client):
    response = client.delete("/invoices/inv-01")
    assert response.status_code == 200
    assert response.json() == {"message": "Deleted Invoice.", "errors": {}}
    assert client.delete("/invoices/inv-01").status_code == 404


# ---- Customers ----

def test_customer_table(client):
    body = client.get("/customers/", params={"query": "oliveira"}).json()
    assert len(body) == 1
    assert body[0]["total_invoices"] == 2
    assert body[0]["total_paid_formatted"] == "$12.50"


def test_customer_fields(client):
    body = client.get("/customers/fields").json()
    assert body[0] == {"id": "cc27c14a-0acf-4f4a-a6c9-d45682c144b9", "name": "Amy Burns"}
    assert len(body) == 4
