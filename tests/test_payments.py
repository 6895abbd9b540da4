# tests/test_payments.py
import hashlib
import hmac
import json
import time
from datetime import date

import pytest
import stripe

from config import get_settings
from models import Notification, Payment
from services.payment_service import due_date_for, payment_type_for
from services.stripe_gateway import to_minor_units


class FakeStripe:
    """Records PaymentIntent calls made through the stripe library."""

    def __init__(self):
        self.created = []
        self.cancelled = []
        self.status = "requires_payment_method"

    def create(self, **params):
        self.created.append(params)
        intent_id = f"pi_{len(self.created)}"
        return {"id": intent_id, "client_secret": f"{intent_id}_secret", "status": "requires_payment_method"}

    def retrieve(self, intent_id, **params):
        return {"id": intent_id, "status": self.status}

    def cancel(self, intent_id, **params):
        self.cancelled.append(intent_id)
        return {"id": intent_id, "status": "canceled"}


@pytest.fixture
def fake_stripe(monkeypatch):
    fake = FakeStripe()
    monkeypatch.setattr(stripe.PaymentIntent, "create", fake.create)
    monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake.retrieve)
    monkeypatch.setattr(stripe.PaymentIntent, "cancel", fake.cancel)
    return fake


@pytest.fixture
def leased(make_property, make_lease, landlord, tenant):
    prop = make_property(landlord)
    lease = make_lease(prop, tenant, payment_due_day=5)
    return prop, lease


def _create(client, headers, landlord, tenant, prop, **overrides):
    body = {
        "tenantId": tenant.id,
        "propertyId": prop.id,
        "period": "2026-10",
        "rentAmount": 1200,
        "utilitiesAmount": 80,
        "description": "October rent",
    }
    body.update(overrides)
    return client.post("/api/payments/create", headers=headers(landlord), json=body)


def _signed(payload: dict):
    body = json.dumps(payload)
    timestamp = int(time.time())
    secret = get_settings().stripe_webhook_secret
    signature = hmac.new(secret.encode(), f"{timestamp}.{body}".encode(), hashlib.sha256).hexdigest()
    return body, {"Stripe-Signature": f"t={timestamp},v1={signature}", "Content-Type": "application/json"}


def _event(event_type, intent_id):
    return {
        "id": "evt_1",
        "object": "event",
        "type": event_type,
        "data": {"object": {"id": intent_id, "object": "payment_intent"}},
    }


def test_helpers():
    assert to_minor_units(12.345) == 1235
    assert to_minor_units("1200.5") == 120050
    assert payment_type_for(100, 0, 0) == "rent"
    assert payment_type_for(0, 0, 50) == "deposit"
    assert payment_type_for(100, 20, 0) == "combined"
    assert due_date_for("2026-02", 31) == date(2026, 2, 28)
    assert due_date_for("2026-10", 5) == date(2026, 10, 5)


def test_landlord_creates_payment(client, db, leased, landlord, tenant, headers):
    prop, lease = leased
    response = _create(client, headers, landlord, tenant, prop, depositAmount=1200)
    assert response.status_code == 201
    body = response.json()
    assert body["totalAmount"] == 2480
    assert body["amount"] == 2480
    assert body["type"] == "combined"
    assert body["status"] == "pending"
    assert body["isFirstPayment"] is True
    assert body["leaseId"] == lease.id
    assert body["dueDate"] == "2026-10-05"
    assert body["tenantName"] == "Tom Tenant"
    assert body["clientSecret"] is None

    notification = db.query(Notification).filter(Notification.user_id == tenant.id).one()
    assert notification.type == "payment_requested"


def test_deposit_only_on_first_payment(client, leased, landlord, tenant, headers):
    prop, _ = leased
    assert _create(client, headers, landlord, tenant, prop).status_code == 201
    response = _create(client, headers, landlord, tenant, prop, period="2026-11", depositAmount=500)
    assert response.status_code == 400
    assert response.json()["error"] == "Deposit can only be included in the first payment"

    second = _create(client, headers, landlord, tenant, prop, period="2026-11")
    assert second.json()["isFirstPayment"] is False


def test_create_payment_rejections(client, make_user, make_property, leased, landlord, tenant, headers):
    prop, _ = leased
    zero = _create(client, headers, landlord, tenant, prop, rentAmount=0, utilitiesAmount=0)
    assert zero.status_code == 400
    assert zero.json()["error"] == "Total amount must be greater than 0"

    assert _create(client, headers, landlord, tenant, prop, period="2026-13").status_code == 422

    stranger = make_user("tenant")
    no_lease = _create(client, headers, landlord, stranger, prop)
    assert no_lease.status_code == 400

    other_landlord = make_user("landlord")
    assert _create(client, headers, other_landlord, tenant, prop).status_code == 403

    assert _create(client, headers, tenant, tenant, prop).status_code == 403


def test_check_existing_ignores_cancelled(client, db, leased, landlord, tenant, headers):
    prop, _ = leased
    url = f"/api/payments/check-existing/{tenant.id}/{prop.id}"
    assert client.get(url, headers=headers(landlord)).json() == {"hasExistingPayments": False}

    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]
    assert client.get(url, headers=headers(landlord)).json() == {"hasExistingPayments": True}

    client.delete(f"/api/payments/{payment_id}", headers=headers(landlord))
    assert client.get(url, headers=headers(landlord)).json() == {"hasExistingPayments": False}


def test_lists_by_role(client, make_user, leased, landlord, tenant, headers):
    prop, _ = leased
    _create(client, headers, landlord, tenant, prop)
    assert len(client.get("/api/payments/tenant", headers=headers(tenant)).json()["payments"]) == 1
    assert len(client.get("/api/payments/landlord", headers=headers(landlord)).json()["payments"]) == 1
    assert client.get("/api/payments/tenant", headers=headers(make_user("tenant"))).json()["payments"] == []
    assert client.get("/api/payments/tenant", headers=headers(landlord)).status_code == 403


def test_get_payment_visibility(client, make_user, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]
    assert client.get(f"/api/payments/{payment_id}", headers=headers(landlord)).status_code == 200
    assert client.get(f"/api/payments/{payment_id}", headers=headers(make_user("tenant"))).status_code == 403
    assert client.get("/api/payments/999", headers=headers(tenant)).status_code == 404


def test_pay_creates_intent_once(client, fake_stripe, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]

    first = client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))
    assert first.status_code == 200
    assert first.json() == {"clientSecret": "pi_1_secret", "paymentIntentId": "pi_1"}

    params = fake_stripe.created[0]
    assert params["amount"] == 128000
    assert params["currency"] == "usd"
    assert params["automatic_payment_methods"] == {"enabled": True}
    assert params["metadata"]["paymentId"] == str(payment_id)

    second = client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))
    assert second.json()["paymentIntentId"] == "pi_1"
    assert len(fake_stripe.created) == 1

    detail = client.get(f"/api/payments/{payment_id}", headers=headers(tenant)).json()
    assert detail["clientSecret"] == "pi_1_secret"
    assert detail["stripePaymentIntentId"] == "pi_1"


def test_only_billed_tenant_pays(client, fake_stripe, make_user, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]
    response = client.post(f"/api/payments/pay/{payment_id}", headers=headers(make_user("tenant")))
    assert response.status_code == 403


def test_stripe_failure_is_bad_gateway(client, monkeypatch, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]

    def boom(**params):
        raise stripe.APIConnectionError("Stripe is unreachable")

    monkeypatch.setattr(stripe.PaymentIntent, "create", boom)
    response = client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))
    assert response.status_code == 502


def test_webhook_marks_paid_and_notifies_landlord(client, db, fake_stripe, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]
    client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))

    body, webhook_headers = _signed(_event("payment_intent.succeeded", "pi_1"))
    response = client.post("/api/payments/webhook", content=body, headers=webhook_headers)
    assert response.status_code == 200
    assert response.json() == {"received": True, "paymentId": payment_id}

    db.expire_all()
    payment = db.get(Payment, payment_id)
    assert payment.status == "paid"
    assert payment.paid_at is not None
    received = db.query(Notification).filter(Notification.user_id == landlord.id).one()
    assert received.type == "payment_received"

    # paid is final
    body, webhook_headers = _signed(_event("payment_intent.canceled", "pi_1"))
    client.post("/api/payments/webhook", content=body, headers=webhook_headers)
    db.expire_all()
    assert db.get(Payment, payment_id).status == "paid"

    already = client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))
    assert already.status_code == 400
    assert already.json()["error"] == "Payment already completed"


def test_webhook_payment_failed(client, db, fake_stripe, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]
    client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))

    body, webhook_headers = _signed(_event("payment_intent.payment_failed", "pi_1"))
    client.post("/api/payments/webhook", content=body, headers=webhook_headers)
    db.expire_all()
    assert db.get(Payment, payment_id).status == "failed"


def test_webhook_ignores_unknown_intents(client):
    body, webhook_headers = _signed(_event("payment_intent.succeeded", "pi_unknown"))
    response = client.post("/api/payments/webhook", content=body, headers=webhook_headers)
    assert response.json() == {"received": True, "paymentId": None}


def test_webhook_rejects_bad_signature(client):
    body, webhook_headers = _signed(_event("payment_intent.succeeded", "pi_1"))
    webhook_headers["Stripe-Signature"] = "t=1,v1=deadbeef"
    response = client.post("/api/payments/webhook", content=body, headers=webhook_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid signature"


def test_sync_applies_stripe_status(client, db, fake_stripe, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]

    no_intent = client.post(f"/api/payments/sync/{payment_id}", headers=headers(tenant))
    assert no_intent.status_code == 400
    assert no_intent.json()["error"] == "No payment intent for this payment"

    client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))
    fake_stripe.status = "processing"
    pending = client.post(f"/api/payments/sync/{payment_id}", headers=headers(tenant)).json()
    assert pending == {"id": payment_id, "status": "pending", "stripeStatus": "processing"}

    fake_stripe.status = "succeeded"
    paid = client.post(f"/api/payments/sync/{payment_id}", headers=headers(tenant)).json()
    assert paid["status"] == "paid"


def test_cancel_payment_cancels_intent(client, fake_stripe, leased, landlord, tenant, headers):
    prop, _ = leased
    payment_id = _create(client, headers, landlord, tenant, prop).json()["id"]
    client.post(f"/api/payments/pay/{payment_id}", headers=headers(tenant))

    response = client.delete(f"/api/payments/{payment_id}", headers=headers(landlord))
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert fake_stripe.cancelled == ["pi_1"]

    again = client.delete(f"/api/payments/{payment_id}", headers=headers(landlord))
    assert again.status_code == 400


def test_test_intent_in_debug(client, fake_stripe, tenant, headers):
    response = client.post("/api/payments/test-intent", headers=headers(tenant), json={"amount": 2500})
    assert response.status_code == 200
    assert response.json()["paymentIntentId"] == "pi_1"
    assert fake_stripe.created[0]["amount"] == 2500
    assert fake_stripe.created[0]["metadata"] == {"test": "true", "userId": str(tenant.id)}


def test_test_intent_is_hidden_outside_debug(client, monkeypatch, fake_stripe, tenant, headers):
    monkeypatch.setattr(get_settings(), "debug", False)
    response = client.post("/api/payments/test-intent", headers=headers(tenant), json={"amount": 2500})
    assert response.status_code == 404
    assert response.json()["error"] == "Route not found"
    assert fake_stripe.created == []
