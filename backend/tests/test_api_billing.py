"""
API tests for invoices and payments.
"""
import uuid

import pytest


def _invoice(client, headers, number="INV-1001", amount=1000.0, **extra):
    response = client.post("/api/v1/invoices", headers=headers, json={
        "invoice_number": number,
        "invoice_amount": amount,
        "status": "sent",
        **extra,
    })
    assert response.status_code == 201
    return response.json()


class TestInvoices:

    def test_balance_starts_at_amount(self, client, admin_headers):
        invoice = _invoice(client, admin_headers)
        assert invoice["balance_due"] == 1000.0
        assert invoice["status"] == "sent"

    def test_duplicate_number_conflicts(self, client, admin_headers):
        _invoice(client, admin_headers)
        response = client.post("/api/v1/invoices", headers=admin_headers,
                               json={"invoice_number": "INV-1001", "invoice_amount": 5})
        assert response.status_code == 409

    def test_employee_cannot_create(self, client, employee_headers):
        response = client.post("/api/v1/invoices", headers=employee_headers,
                               json={"invoice_number": "INV-1", "invoice_amount": 5})
        assert response.status_code == 403

    def test_client_sees_only_own_invoices(self, client, admin_headers, client_headers, customer):
        _invoice(client, admin_headers, number="INV-1", client_id=str(customer.id))
        _invoice(client, admin_headers, number="INV-2")

        listing = client.get("/api/v1/invoices", headers=client_headers).json()
        assert [i["invoice_number"] for i in listing["invoices"]] == ["INV-1"]


    def test_foreign_client_or_event_rejected(self, client, admin_headers, rival_customer):
        response = client.post("/api/v1/invoices", headers=admin_headers, json={
            "invoice_number": "INV-9", "invoice_amount": 10, "client_id": str(rival_customer.id),
        })
        assert response.status_code == 400

        response = client.post("/api/v1/invoices", headers=admin_headers, json={
            "invoice_number": "INV-9", "invoice_amount": 10, "event_id": str(uuid.uuid4()),
        })
        assert response.status_code == 400
        assert client.get("/api/v1/invoices", headers=admin_headers).json()["total"] == 0

    def test_amount_change_moves_balance(self, client, admin_headers):
        invoice = _invoice(client, admin_headers, amount=100.0)
        url = f"/api/v1/invoices/{invoice['id']}"

        raised = client.patch(url, headers=admin_headers, json={"invoice_amount": 500}).json()
        assert raised["invoice_amount"] == 500
        assert raised["balance_due"] == pytest.approx(500.0)

        client.post(f"{url}/payments", headers=admin_headers, json={
            "amount": 100, "payment_method": "card", "payment_date": "2024-03-01",
        })
        current = client.get(url, headers=admin_headers).json()
        assert current["balance_due"] == pytest.approx(400.0)
        assert current["status"] == "sent"

        lowered = client.patch(url, headers=admin_headers, json={"invoice_amount": 50}).json()
        assert lowered["balance_due"] == 0

    def test_explicit_balance_wins_over_amount_shift(self, client, admin_headers):
        invoice = _invoice(client, admin_headers, amount=100.0)
        body = client.patch(f"/api/v1/invoices/{invoice['id']}", headers=admin_headers,
                            json={"invoice_amount": 300, "balance_due": 120}).json()
        assert body["invoice_amount"] == 300
        assert body["balance_due"] == 120


class TestPayments:

    def test_partial_then_full_payment(self, client, admin_headers):
        invoice = _invoice(client, admin_headers)
        url = f"/api/v1/invoices/{invoice['id']}/payments"

        first = client.post(url, headers=admin_headers, json={
            "amount": 400, "payment_method": "card", "payment_date": "2024-03-01",
        })
        assert first.status_code == 201
        current = client.get(f"/api/v1/invoices/{invoice['id']}", headers=admin_headers).json()
        assert current["balance_due"] == pytest.approx(600.0)
        assert current["status"] == "sent"

        client.post(url, headers=admin_headers, json={
            "amount": 700, "payment_method": "cash", "payment_date": "2024-03-10",
        })
        paid = client.get(f"/api/v1/invoices/{invoice['id']}", headers=admin_headers).json()
        assert paid["balance_due"] == 0
        assert paid["status"] == "paid"
        assert paid["paid_date"] == "2024-03-10"

        payments = client.get(url, headers=admin_headers).json()
        assert [p["payment_date"] for p in payments] == ["2024-03-10", "2024-03-01"]

    def test_non_positive_amount_rejected(self, client, admin_headers):
        invoice = _invoice(client, admin_headers)
        response = client.post(f"/api/v1/invoices/{invoice['id']}/payments", headers=admin_headers, json={
            "amount": 0, "payment_method": "card", "payment_date": "2024-03-01",
        })
        assert response.status_code == 422

    def test_cancelled_invoice_rejects_payment(self, client, admin_headers):
        invoice = _invoice(client, admin_headers, status="cancelled")
        response = client.post(f"/api/v1/invoices/{invoice['id']}/payments", headers=admin_headers, json={
            "amount": 10, "payment_method": "card", "payment_date": "2024-03-01",
        })
        assert response.status_code == 400

    def test_paid_invoice_reopens_when_amount_rises(self, client, admin_headers):
        invoice = _invoice(client, admin_headers, amount=100.0)
        url = f"/api/v1/invoices/{invoice['id']}"
        client.post(f"{url}/payments", headers=admin_headers, json={
            "amount": 100, "payment_method": "card", "payment_date": "2024-03-01",
        })
        assert client.get(url, headers=admin_headers).json()["status"] == "paid"

        body = client.patch(url, headers=admin_headers, json={"invoice_amount": 150}).json()
        assert body["balance_due"] == pytest.approx(50.0)
        assert body["status"] == "sent"
        assert body["paid_date"] is None
