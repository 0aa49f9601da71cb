"""
HTTP API tests: authentication, the quote to payment flow and error bodies.
"""

from datetime import timedelta
from uuid import uuid4

from app.core.security import create_access_token

API = "/api/v1"


async def _create_client(test_client, headers) -> dict:
    response = await test_client.post(
        f"{API}/clients",
        json={"name": "Acme Corp", "email": "billing@acme.example"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def _create_quote(test_client, headers, client_id: str) -> dict:
    response = await test_client.post(
        f"{API}/quotes",
        json={
            "client_id": client_id,
            "items": [
                {"description": "Widget", "quantity": 2, "unit_price": "100"},
                {"description": "Setup", "quantity": 1, "unit_price": "50"},
            ],
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def test_missing_token_is_rejected(test_client):
    response = await test_client.get(f"{API}/quotes")

    assert response.status_code in (401, 403)


async def test_invalid_token_is_rejected(test_client):
    response = await test_client.get(f"{API}/quotes", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid authentication token"


async def test_expired_token_is_rejected(test_client, regular_user):
    token = create_access_token({"sub": str(regular_user.id)}, expires_delta=timedelta(minutes=-1))

    response = await test_client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_token_for_unknown_user_is_rejected(test_client):
    token = create_access_token({"sub": str(uuid4())})

    response = await test_client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_inactive_user_is_forbidden(test_client, inactive_user):
    token = create_access_token({"sub": str(inactive_user.id)})

    response = await test_client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


async def test_me(test_client, auth_headers, regular_user):
    response = await test_client.get(f"{API}/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["email"] == regular_user.email
    assert response.json()["role"] == "user"


async def test_quote_to_payment_flow(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    quote = await _create_quote(test_client, auth_headers, client["id"])

    assert quote["quote_number"] == "QT-0001"
    assert quote["subtotal"] == "250.00"
    assert quote["total"] == "250.00"
    assert quote["status"] == "draft"

    response = await test_client.post(f"{API}/quotes/{quote['id']}/convert-to-invoice", headers=auth_headers)
    assert response.status_code == 201
    invoice = response.json()
    assert invoice["invoice_number"] == "INV-0001"
    assert invoice["payment_status"] == "pending"
    assert invoice["paid_amount"] == "0.00"

    response = await test_client.post(f"{API}/quotes/{quote['id']}/convert-to-invoice", headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Quote already converted to invoice"

    response = await test_client.post(
        f"{API}/invoices/{invoice['id']}/payments",
        json={"amount": "250", "payment_method": "bank_transfer", "transaction_id": "TX-1"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    payment = response.json()
    assert payment["invoice_payment_status"] == "paid"
    assert payment["invoice_paid_amount"] == "250.00"

    response = await test_client.delete(f"{API}/payments/{payment['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = await test_client.get(f"{API}/invoices/{invoice['id']}", headers=auth_headers)
    assert response.status_code == 200
    detail = response.json()
    assert detail["payment_status"] == "pending"
    assert detail["paid_amount"] == "0.00"
    assert detail["quote"]["status"] == "invoiced"
    assert detail["quote"]["client"]["name"] == "Acme Corp"

    response = await test_client.get(f"{API}/invoices", headers=auth_headers)
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["quote_number"] == "QT-0001"


async def test_overpayment_returns_warning(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    quote = await _create_quote(test_client, auth_headers, client["id"])
    invoice = (await test_client.post(f"{API}/quotes/{quote['id']}/convert-to-invoice", headers=auth_headers)).json()

    response = await test_client.post(
        f"{API}/invoices/{invoice['id']}/payments",
        json={"amount": "300", "payment_method": "cash"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["invoice_paid_amount"] == "300.00"
    assert response.json()["invoice_payment_status"] == "paid"
    assert response.json()["warning"]


async def test_invalid_payment_method_is_422(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    quote = await _create_quote(test_client, auth_headers, client["id"])
    invoice = (await test_client.post(f"{API}/quotes/{quote['id']}/convert-to-invoice", headers=auth_headers)).json()

    response = await test_client.post(
        f"{API}/invoices/{invoice['id']}/payments",
        json={"amount": "10", "payment_method": "barter"},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert "allowed" in response.json()["error"]["details"]


async def test_convert_unknown_quote_is_404(test_client, auth_headers):
    response = await test_client.post(f"{API}/quotes/{uuid4()}/convert-to-invoice", headers=auth_headers)

    assert response.status_code == 404


async def test_invalid_transition_is_422(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    quote = await _create_quote(test_client, auth_headers, client["id"])

    response = await test_client.patch(
        f"{API}/quotes/{quote['id']}", json={"status": "approved"}, headers=auth_headers
    )

    assert response.status_code == 422


async def test_negative_discount_is_422(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)

    response = await test_client.post(
        f"{API}/quotes",
        json={"client_id": client["id"], "items": [], "discount": "-1"},
        headers=auth_headers,
    )

    assert response.status_code == 422


async def test_client_with_quotes_cannot_be_deleted(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    await _create_quote(test_client, auth_headers, client["id"])

    response = await test_client.delete(f"{API}/clients/{client['id']}", headers=auth_headers)

    assert response.status_code == 409


async def test_settings_require_admin_to_change(test_client, auth_headers, admin_headers):
    response = await test_client.put(f"{API}/settings", json={"quotePrefix": "EST"}, headers=auth_headers)
    assert response.status_code == 403

    response = await test_client.put(f"{API}/settings", json={"quotePrefix": "EST"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["settings"]["quotePrefix"] == "EST"

    client = await _create_client(test_client, auth_headers)
    quote = await _create_quote(test_client, auth_headers, client["id"])
    assert quote["quote_number"] == "EST-0001"


async def test_refresh_overdue_requires_admin(test_client, auth_headers, admin_headers):
    response = await test_client.post(f"{API}/invoices/refresh-overdue", headers=auth_headers)
    assert response.status_code == 403

    response = await test_client.post(f"{API}/invoices/refresh-overdue", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"updated": 0}


async def test_activity_log_records_actions(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    await _create_quote(test_client, auth_headers, client["id"])

    response = await test_client.get(f"{API}/activity-logs", headers=auth_headers)

    assert response.status_code == 200
    actions = [entry["action"] for entry in response.json()["items"]]
    assert set(actions) == {"create_client", "create_quote"}


async def test_analytics_endpoints(test_client, auth_headers):
    response = await test_client.get(f"{API}/analytics/dashboard", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["total_quotes"] == 0

    response = await test_client.get(f"{API}/analytics", params={"timeRange": 3}, headers=auth_headers)
    assert response.status_code == 200
    assert len(response.json()["monthly_data"]) == 3


async def test_oversized_amounts_are_422(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    quote = await _create_quote(test_client, auth_headers, client["id"])
    invoice = (await test_client.post(f"{API}/quotes/{quote['id']}/convert-to-invoice", headers=auth_headers)).json()

    response = await test_client.post(
        f"{API}/invoices/{invoice['id']}/payments",
        json={"amount": "99999999999999999", "payment_method": "cash"},
        headers=auth_headers,
    )
    assert response.status_code == 422
    assert response.json()["error"]["details"]["max"] == "9999999999.99"

    response = await test_client.get(f"{API}/invoices/{invoice['id']}/payments", headers=auth_headers)
    assert response.json()["items"] == []

    response = await test_client.post(
        f"{API}/quotes",
        json={
            "client_id": client["id"],
            "items": [{"description": "Yacht", "quantity": 1, "unit_price": "123456789012.50"}],
        },
        headers=auth_headers,
    )
    assert response.status_code == 422


async def test_pdf_downloads(test_client, auth_headers):
    client = await _create_client(test_client, auth_headers)
    quote = await _create_quote(test_client, auth_headers, client["id"])

    response = await test_client.get(f"{API}/quotes/{quote['id']}/pdf", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "QT-0001.pdf" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF-")

    invoice = (await test_client.post(f"{API}/quotes/{quote['id']}/convert-to-invoice", headers=auth_headers)).json()
    response = await test_client.get(f"{API}/invoices/{invoice['id']}/pdf", headers=auth_headers)
    assert response.status_code == 200
    assert "INV-0001.pdf" in response.headers["content-disposition"]

    response = await test_client.get(f"{API}/invoices/{uuid4()}/pdf", headers=auth_headers)
    assert response.status_code == 404


async def test_user_administration_requires_admin(test_client, auth_headers):
    response = await test_client.get(f"{API}/users", headers=auth_headers)

    assert response.status_code == 403


async def test_admin_registers_and_deactivates_users(test_client, admin_headers, admin_user):
    response = await test_client.post(
        f"{API}/users",
        json={"email": "new@example.com", "name": "New Hire", "role": "manager"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    new_user = response.json()
    assert new_user["status"] == "active"

    response = await test_client.post(
        f"{API}/users",
        json={"email": "new@example.com", "name": "Duplicate"},
        headers=admin_headers,
    )
    assert response.status_code == 409

    response = await test_client.get(f"{API}/users", headers=admin_headers)
    assert response.json()["total"] == 2

    response = await test_client.delete(f"{API}/users/{new_user['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "inactive"

    token = create_access_token({"sub": new_user["id"]})
    response = await test_client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403

    response = await test_client.delete(f"{API}/users/{admin_user.id}", headers=admin_headers)
    assert response.status_code == 422

    response = await test_client.delete(f"{API}/users/{uuid4()}", headers=admin_headers)
    assert response.status_code == 404

    response = await test_client.get(f"{API}/activity-logs", headers=admin_headers)
    actions = {entry["action"] for entry in response.json()["items"]}
    assert {"create_user", "deactivate_user"} <= actions
