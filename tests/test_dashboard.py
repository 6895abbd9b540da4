# tests/test_dashboard.py
from datetime import date

import pytest

from models import Application, MaintenanceRequest, Payment


@pytest.fixture
def rented(db, make_user, make_property, make_lease, landlord, tenant):
    prop = make_property(landlord, title="Leased loft")
    lease = make_lease(prop, tenant)
    studio = make_property(landlord, title="Empty studio")
    make_property(make_user("landlord"), title="Elsewhere")

    this_month = date.today().strftime("%Y-%m")
    db.add_all([
        MaintenanceRequest(
            property_id=prop.id,
            tenant_id=tenant.id,
            landlord_id=landlord.id,
            title="No heat",
            description="Radiator is cold",
            priority="urgent",
        ),
        MaintenanceRequest(
            property_id=prop.id,
            tenant_id=tenant.id,
            landlord_id=landlord.id,
            title="Old leak",
            description="Fixed",
            status="completed",
        ),
        Payment(
            lease_id=lease.id,
            tenant_id=tenant.id,
            landlord_id=landlord.id,
            property_id=prop.id,
            rent_amount=1200,
            total_amount=1200,
            period=this_month,
            status="pending",
        ),
        Payment(
            lease_id=lease.id,
            tenant_id=tenant.id,
            landlord_id=landlord.id,
            property_id=prop.id,
            rent_amount=1200,
            utilities_amount=50,
            total_amount=1250,
            period=this_month,
            status="paid",
        ),
    ])
    db.commit()
    return prop, lease, studio


def test_tenant_dashboard_summary(client, rented, tenant, headers):
    _, lease, _ = rented
    response = client.get("/api/dashboard/tenant", headers=headers(tenant))
    assert response.status_code == 200
    summary = response.json()
    # Both of the unleased listings are on the market
    assert summary["availableProperties"] == 2
    assert summary["myApplications"] == 0
    assert summary["openMaintenanceRequests"] == 1
    assert summary["latestOpenMaintenance"]["title"] == "No heat"
    assert summary["paymentsDueAmount"] == 1200
    assert summary["pendingPaymentsCount"] == 1
    assert summary["hasActiveLease"] is True
    assert summary["currentLease"]["id"] == lease.id
    assert summary["currentLease"]["propertyTitle"] == "Leased loft"
    assert summary["nextPayment"]["totalAmount"] == 1200


def test_tenant_dashboard_without_lease(client, make_user, make_property, landlord, headers):
    make_property(landlord)
    newcomer = make_user("tenant")
    summary = client.get("/api/dashboard/tenant", headers=headers(newcomer)).json()
    assert summary["availableProperties"] == 1
    assert summary["hasActiveLease"] is False
    assert summary["currentLease"] is None
    assert summary["nextPayment"] is None
    assert summary["paymentsDueAmount"] == 0


def test_landlord_dashboard_summary(client, db, make_user, rented, landlord, tenant, headers):
    _, _, studio = rented
    db.add(Application(tenant_id=make_user("tenant").id, landlord_id=landlord.id, property_id=studio.id))
    db.commit()

    response = client.get("/api/dashboard/landlord", headers=headers(landlord))
    assert response.status_code == 200
    summary = response.json()
    assert summary["totalProperties"] == 2
    assert summary["availableProperties"] == 1
    assert summary["rentedProperties"] == 1
    assert summary["activeLeases"] == 1
    assert summary["pendingApplications"] == 1
    assert summary["openMaintenanceRequests"] == 1
    assert summary["urgentMaintenanceRequests"] == 1
    assert summary["tenants"] == [{"id": tenant.id, "name": "Tom Tenant", "email": tenant.email}]
    assert summary["totalRevenue"] == 1250
    assert summary["thisMonthRevenue"] == 1250
    assert summary["paidCount"] == 1
    assert summary["pendingAmount"] == 1200
    assert summary["pendingCount"] == 1


@pytest.mark.parametrize(
    "path, role",
    [("/api/dashboard/tenant", "landlord"), ("/api/dashboard/landlord", "tenant"), ("/api/dashboard/landlord", "admin")],
)
def test_dashboards_are_role_gated(client, make_user, headers, path, role):
    assert client.get(path, headers=headers(make_user(role))).status_code == 403


def test_dashboards_require_a_token(client):
    assert client.get("/api/dashboard/tenant").status_code == 401
