# tests/test_leases.py
from datetime import date, timedelta

from models import Lease, Notification, Property
from services.lease_service import LeaseService


def _lease_body(prop, tenant, start=None, **overrides):
    start = start or date.today()
    body = {
        "property_id": prop.id,
        "tenant_id": tenant.id,
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=365)).isoformat(),
        "monthly_rent": 1100,
        "security_deposit": 1100,
        "utilities_cost": 75,
        "payment_due_day": 5,
    }
    body.update(overrides)
    return body


def test_create_lease_starting_today_is_active(client, db, make_property, landlord, tenant, headers):
    prop = make_property(landlord)
    response = client.post("/api/leases", headers=headers(landlord), json=_lease_body(prop, tenant))
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "active"
    assert body["propertyTitle"] == "Sunny flat"
    assert body["tenantName"] == "Tom Tenant"
    assert body["landlordEmail"] == landlord.email
    assert body["paymentDueDay"] == 5
    assert body["utilitiesCost"] == 75

    db.expire_all()
    assert db.get(Property, prop.id).status == "rented"
    assert db.query(Notification).filter(Notification.type == "lease_created").count() == 1


def test_create_future_lease_is_pending(client, make_property, landlord, tenant, headers):
    prop = make_property(landlord)
    start = date.today() + timedelta(days=14)
    response = client.post("/api/leases", headers=headers(landlord), json=_lease_body(prop, tenant, start=start))
    assert response.json()["status"] == "pending"


def test_create_lease_accepts_camel_case(client, make_property, landlord, tenant, headers):
    prop = make_property(landlord)
    start = date.today()
    response = client.post("/api/leases", headers=headers(landlord), json={
        "propertyId": prop.id,
        "tenantId": tenant.id,
        "startDate": start.isoformat(),
        "endDate": (start + timedelta(days=90)).isoformat(),
        "monthlyRent": 999,
    })
    assert response.status_code == 201
    assert response.json()["monthlyRent"] == 999


def test_create_lease_rejections(client, make_user, make_property, landlord, tenant, headers):
    prop = make_property(landlord)

    bad_dates = _lease_body(prop, tenant, end_date=date.today().isoformat())
    assert client.post("/api/leases", headers=headers(landlord), json=bad_dates).status_code == 422

    bad_due_day = _lease_body(prop, tenant, payment_due_day=31)
    assert client.post("/api/leases", headers=headers(landlord), json=bad_due_day).status_code == 422

    other_landlord = make_user("landlord")
    response = client.post("/api/leases", headers=headers(other_landlord), json=_lease_body(prop, tenant))
    assert response.status_code == 403

    not_a_tenant = _lease_body(prop, other_landlord)
    response = client.post("/api/leases", headers=headers(landlord), json=not_a_tenant)
    assert response.status_code == 400


def test_list_leases_scoped_by_role(client, make_user, make_property, make_lease, landlord, tenant, admin, headers):
    prop = make_property(landlord)
    other_prop = make_property(make_user("landlord"))
    mine = make_lease(prop, tenant)
    make_lease(other_prop, make_user("tenant"))

    tenant_view = client.get("/api/leases", headers=headers(tenant)).json()["data"]
    assert [lease["id"] for lease in tenant_view] == [mine.id]

    landlord_view = client.get("/api/leases", headers=headers(landlord)).json()["data"]
    assert [lease["id"] for lease in landlord_view] == [mine.id]

    admin_view = client.get("/api/leases", headers=headers(admin)).json()["data"]
    assert len(admin_view) == 2

    filtered = client.get("/api/leases", params={"status": "terminated"}, headers=headers(admin)).json()["data"]
    assert filtered == []


def test_get_lease_only_for_parties(client, make_user, make_property, make_lease, landlord, tenant, headers):
    lease = make_lease(make_property(landlord), tenant)
    assert client.get(f"/api/leases/{lease.id}", headers=headers(tenant)).status_code == 200
    assert client.get(f"/api/leases/{lease.id}", headers=headers(make_user("tenant"))).status_code == 403
    assert client.get("/api/leases/999", headers=headers(tenant)).status_code == 404


def test_update_lease(client, make_property, make_lease, landlord, tenant, headers):
    lease = make_lease(make_property(landlord), tenant)
    response = client.put(
        f"/api/leases/{lease.id}",
        headers=headers(landlord),
        json={"monthlyRent": 1300, "notes": "Renewed"},
    )
    assert response.status_code == 200
    assert response.json()["monthlyRent"] == 1300
    assert response.json()["notes"] == "Renewed"


def test_update_lease_to_bad_dates(client, make_property, make_lease, landlord, tenant, headers):
    lease = make_lease(make_property(landlord), tenant)
    response = client.put(
        f"/api/leases/{lease.id}",
        headers=headers(landlord),
        json={"end_date": lease.start_date.isoformat()},
    )
    assert response.status_code == 400


def test_tenant_cannot_update_lease(client, make_property, make_lease, landlord, tenant, headers):
    lease = make_lease(make_property(landlord), tenant)
    response = client.put(f"/api/leases/{lease.id}", headers=headers(tenant), json={"notes": "mine"})
    assert response.status_code == 403


def test_update_lease_status_to_expired_releases_property(client, db, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    lease = make_lease(prop, tenant)
    response = client.put(f"/api/leases/{lease.id}", headers=headers(landlord), json={"status": "expired"})
    assert response.status_code == 200

    db.expire_all()
    assert db.get(Property, prop.id).status == "available"


def test_ended_leases_report_ended():
    assert Lease(status="terminated").is_ended
    assert Lease(status="expired").is_ended
    assert not Lease(status="active").is_ended


def test_terminate_releases_property(client, db, make_property, make_lease, landlord, tenant, headers):
    prop = make_property(landlord)
    lease = make_lease(prop, tenant)
    response = client.delete(f"/api/leases/{lease.id}", headers=headers(landlord))
    assert response.status_code == 200
    assert response.json()["status"] == "terminated"

    db.expire_all()
    assert db.get(Property, prop.id).status == "available"
    assert db.query(Notification).filter(Notification.type == "lease_terminated").count() == 1

    again = client.delete(f"/api/leases/{lease.id}", headers=headers(landlord))
    assert again.status_code == 400


def test_property_stays_rented_while_another_lease_is_active(db, make_user, make_property, make_lease, landlord, tenant):
    prop = make_property(landlord)
    first = make_lease(prop, tenant)
    make_lease(prop, make_user("tenant"))

    LeaseService.terminate(db, landlord, first.id)
    db.commit()
    assert prop.status == "rented"


def test_expire_ended_leases(db, make_property, make_lease, landlord, tenant):
    prop = make_property(landlord)
    ended = make_lease(
        prop,
        tenant,
        start_date=date.today() - timedelta(days=400),
        end_date=date.today() - timedelta(days=1),
    )
    current = make_lease(make_property(landlord), tenant)

    assert LeaseService.expire_ended_leases(db) == 1
    db.commit()
    assert ended.status == "expired"
    assert current.status == "active"
    assert prop.status == "available"


def test_expire_endpoint_is_admin_only(client, landlord, admin, headers):
    assert client.post("/api/leases/expire", headers=headers(landlord)).status_code == 403
    response = client.post("/api/leases/expire", headers=headers(admin))
    assert response.json() == {"expired": 0}
