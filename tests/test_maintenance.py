# tests/test_maintenance.py
import os

from config import get_settings
from models import MaintenanceRequest, Notification


def _file(client, headers, tenant, prop, **overrides):
    body = {
        "property_id": prop.id,
        "title": "Leaking sink",
        "description": "Water under the kitchen sink",
        "category": "plumbing",
        "priority": "high",
    }
    body.update(overrides)
    return client.post("/api/maintenance", headers=headers(tenant), json=body)


def test_tenant_files_request_on_leased_property(client, db, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    response = _file(client, headers, tenant, prop)
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["priority"] == "high"
    assert body["landlord_id"] == landlord.id
    assert body["property_title"] == "Sunny flat"
    assert body["images"] == []

    notification = db.query(Notification).filter(Notification.user_id == landlord.id).one()
    assert notification.type == "maintenance_created"


def test_request_with_images(client, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    response = client.post(
        "/api/maintenance",
        headers=headers(tenant),
        data={"propertyId": str(prop.id), "title": "Broken window", "description": "Cracked pane"},
        files=[("images", ("crack.jpg", b"img", "image/jpeg"))],
    )
    assert response.status_code == 201
    images = response.json()["images"]
    assert len(images) == 1
    assert images[0].startswith(f"/uploads/maintenance/{tenant.id}/")


def test_required_fields(client, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    response = _file(client, headers, tenant, prop, title="   ")
    assert response.status_code == 400
    assert response.json()["error"] == "Please fill in all required fields"


def test_no_active_lease(client, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant, status="terminated")
    response = _file(client, headers, tenant, prop)
    assert response.status_code == 403


def test_invalid_priority(client, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    assert _file(client, headers, tenant, prop, priority="asap").status_code == 422


def test_listing_is_scoped(client, make_user, make_property, make_lease, landlord, tenant, admin, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    _file(client, headers, tenant, prop)
    _file(client, headers, tenant, prop, priority="urgent", title="No heat")

    other_tenant = make_user("tenant")
    assert client.get("/api/maintenance", headers=headers(other_tenant)).json()["data"] == []
    assert len(client.get("/api/maintenance", headers=headers(landlord)).json()["data"]) == 2
    urgent = client.get("/api/maintenance", params={"priority": "urgent"}, headers=headers(admin)).json()["data"]
    assert [r["title"] for r in urgent] == ["No heat"]


def test_landlord_updates_and_tenant_is_notified(client, db, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    request_id = _file(client, headers, tenant, prop).json()["id"]

    response = client.put(
        f"/api/maintenance/{request_id}",
        headers=headers(landlord),
        json={"status": "in_progress", "contractorName": "Bob's Plumbing", "estimatedCost": 120},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "in_progress"
    assert body["contractor_name"] == "Bob's Plumbing"
    assert body["estimated_cost"] == 120

    notification = (
        db.query(Notification)
        .filter(Notification.user_id == tenant.id, Notification.type == "maintenance_updated")
        .one()
    )
    assert "in progress" in notification.message


def test_closed_request_only_accepts_notes_and_cost(client, db, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    request_id = _file(client, headers, tenant, prop).json()["id"]
    client.put(f"/api/maintenance/{request_id}", headers=headers(landlord), json={"status": "completed"})

    reopened = client.put(f"/api/maintenance/{request_id}", headers=headers(landlord), json={"status": "pending"})
    assert reopened.status_code == 400

    noted = client.put(
        f"/api/maintenance/{request_id}",
        headers=headers(landlord),
        json={"notes": "Replaced trap", "actualCost": 95.5},
    )
    assert noted.status_code == 200
    db.expire_all()
    request = db.get(MaintenanceRequest, request_id)
    assert request.status == "completed"
    assert float(request.actual_cost) == 95.5


def test_tenant_cannot_update(client, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    request_id = _file(client, headers, tenant, prop).json()["id"]
    response = client.put(f"/api/maintenance/{request_id}", headers=headers(tenant), json={"status": "completed"})
    assert response.status_code == 403


def test_get_request_visibility(client, make_user, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    make_lease(prop, tenant)
    request_id = _file(client, headers, tenant, prop).json()["id"]
    assert client.get(f"/api/maintenance/{request_id}", headers=headers(tenant)).status_code == 200
    assert client.get(f"/api/maintenance/{request_id}", headers=headers(make_user("landlord"))).status_code == 403
    assert client.get("/api/maintenance/999", headers=headers(tenant)).status_code == 404


def _stored_files():
    return sum(len(files) for _, _, files in os.walk(get_settings().upload_dir))


def test_rejected_request_leaves_no_uploaded_images(client, make_property, landlord, tenant, headers):
    prop = make_property(landlord)
    before = _stored_files()
    response = client.post(
        "/api/maintenance",
        headers=headers(tenant),
        data={"property_id": str(prop.id), "title": "Broken window", "description": "Cracked pane"},
        files=[("images", ("crack.jpg", b"img", "image/jpeg"))],
    )
    assert response.status_code == 403
    assert _stored_files() == before


def test_blank_property_id_in_form_is_a_missing_field(client, tenant, headers):
    response = client.post(
        "/api/maintenance",
        headers=headers(tenant),
        data={"property_id": "", "title": "Broken window", "description": "Cracked pane"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Please fill in all required fields"


def test_closed_requests_report_closed():
    assert MaintenanceRequest(status="completed").is_closed
    assert MaintenanceRequest(status="cancelled").is_closed
    assert not MaintenanceRequest(status="in_progress").is_closed
