# tests/test_api_client.py
import json

import pytest
import responses

from client import ApiClient, ApiError, AuthenticationError

BASE = "http://api.test/api"


@pytest.fixture
def api():
    return ApiClient(base_url=BASE + "/", token="tok-1")


@responses.activate
def test_bearer_header_and_base_url(api):
    responses.add(responses.GET, f"{BASE}/auth/me", json={"id": 1})
    assert api.auth.get_profile() == {"id": 1}
    assert responses.calls[0].request.headers["Authorization"] == "Bearer tok-1"


@responses.activate
def test_token_provider_wins_and_failures_send_no_token():
    responses.add(responses.GET, f"{BASE}/auth/me", json={})
    ApiClient(base_url=BASE, token="stale", token_provider=lambda: "fresh").auth.get_profile()
    assert responses.calls[0].request.headers["Authorization"] == "Bearer fresh"

    def broken():
        raise RuntimeError("storage unavailable")

    ApiClient(base_url=BASE, token_provider=broken).auth.get_profile()
    assert "Authorization" not in responses.calls[1].request.headers


@responses.activate
def test_login_stores_token():
    responses.add(responses.POST, f"{BASE}/auth/login", json={"token": "new-token", "user": {"id": 3}})
    api = ApiClient(base_url=BASE)
    api.auth.login("a@example.com", "secret123", admin_id="ADM-1")
    assert api.token == "new-token"
    assert json.loads(responses.calls[0].request.body) == {
        "email": "a@example.com",
        "password": "secret123",
        "admin_id": "ADM-1",
    }


@responses.activate
def test_401_clears_token_and_calls_handler(api):
    calls = []
    api.on_unauthorized = lambda: calls.append(True)
    responses.add(responses.GET, f"{BASE}/leases", json={"error": "Invalid token"}, status=401)
    with pytest.raises(AuthenticationError) as excinfo:
        api.leases.get_all()
    assert excinfo.value.message == "Invalid token"
    assert api.token is None
    assert calls == [True]
    assert len(responses.calls) == 1


@responses.activate
def test_error_message_fallbacks(api):
    responses.add(responses.GET, f"{BASE}/leases/1", json={"message": "Lease not found"}, status=404)
    responses.add(responses.GET, f"{BASE}/leases/2", body="<html>oops</html>", status=500)
    with pytest.raises(ApiError) as excinfo:
        api.leases.get_by_id(1)
    assert (excinfo.value.status_code, excinfo.value.message) == (404, "Lease not found")
    with pytest.raises(ApiError) as excinfo:
        api.leases.get_by_id(2)
    assert excinfo.value.message == "Request failed"


@responses.activate
def test_properties_are_normalized(api):
    responses.add(responses.GET, f"{BASE}/properties", json=[{
        "id": 1,
        "monthlyRent": 900,
        "amenities": '["wifi"]',
        "pet_friendly": 1,
        "propertyType": "condo",
    }])
    prop = api.properties.get_all(city="Austin", bedrooms=None)[0]
    assert prop["rent_amount"] == 900
    assert prop["amenities"] == ["wifi"]
    assert prop["pet_friendly"] is True
    assert prop["parking_available"] is False
    assert prop["property_type"] == "condo"
    assert prop["security_deposit"] == 0
    assert responses.calls[0].request.url == f"{BASE}/properties?city=Austin"


def test_get_property_requires_id(api):
    with pytest.raises(ValueError):
        api.properties.get_by_id("")
    with pytest.raises(ValueError):
        api.properties.get_by_id(None)


@responses.activate
def test_property_images_go_multipart(api):
    responses.add(responses.POST, f"{BASE}/properties", json={"id": 5}, status=201)
    api.properties.create(
        {"title": "Loft", "amenities": ["gym"], "pet_friendly": True},
        images=[("a.jpg", b"img", "image/jpeg")],
    )
    request = responses.calls[0].request
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="amenities"' in request.body
    assert b'["gym"]' in request.body
    assert b'filename="a.jpg"' in request.body


@responses.activate
def test_notifications_and_payments_shapes(api):
    responses.add(responses.GET, f"{BASE}/notifications", json={"data": [{"id": 1, "read": True}, {"id": 2}]})
    responses.add(responses.GET, f"{BASE}/notifications/unread/count", json={"count": 4, "unreadCount": 4})
    responses.add(responses.GET, f"{BASE}/payments/tenant", json={"payments": [{"id": 9}]})
    responses.add(responses.GET, f"{BASE}/payments/check-existing/2/3", json={"hasExistingPayments": True})

    notes = api.notifications.get_all()
    assert [n["is_read"] for n in notes] == [True, False]
    assert api.notifications.get_unread_count() == 4
    assert api.payments.get_tenant_payments() == [{"id": 9}]
    assert api.payments.check_existing(2, 3) is True


@responses.activate
def test_delete_with_empty_body(api):
    responses.add(responses.DELETE, f"{BASE}/notifications/7", status=204)
    assert api.notifications.delete(7) is None


@responses.activate
def test_tenant_summary_treats_failed_collections_as_empty(api):
    responses.add(responses.GET, f"{BASE}/properties", json=[{"status": "available"}])
    responses.add(responses.GET, f"{BASE}/leases", json={"error": "boom"}, status=500)
    responses.add(responses.GET, f"{BASE}/maintenance", json={"data": [{"status": "pending"}]})
    responses.add(responses.GET, f"{BASE}/payments/tenant", json={"payments": [{"status": "pending", "amount": 75}]})

    summary = api.dashboard.tenant_summary()
    assert summary["availableProperties"] == 1
    assert summary["hasActiveLease"] is False
    assert summary["openMaintenanceRequests"] == 1
    assert summary["paymentsDueAmount"] == 75


@responses.activate
def test_tenant_summary_propagates_authentication_errors(api):
    responses.add(responses.GET, f"{BASE}/properties", json={"error": "Invalid token"}, status=401)
    with pytest.raises(AuthenticationError):
        api.dashboard.tenant_summary()
