# routers/dashboard.py
"""
Dashboard API: role landing page and the per-role summary figures.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_role
from models import User
from paths import role_home_path
from schemas.application import ApplicationResponse
from schemas.lease import LeaseResponse
from schemas.maintenance import MaintenanceResponse
from schemas.payment import PaymentResponse
from schemas.property import PropertyResponse
from services.application_service import ApplicationService, serialize_application
from services.dashboard_service import landlord_summary, tenant_summary
from services.lease_service import LeaseService, serialize_lease
from services.maintenance_service import MaintenanceService, serialize_maintenance
from services.payment_service import PaymentService, serialize_payment
from services.property_service import PropertyService, serialize_property

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _rows(schema, records, serialize):
     """Shape records exactly as the matching list endpoint does."""
     return [schema.model_validate(serialize(r)).model_dump(by_alias=True, mode="json") for r in records]


@router.get("/home")
def home(user: User = Depends(get_current_user)):
     """Where the frontend should send a signed-in user."""
     return {"role": user.role, "redirect": role_home_path(user.role)}


@router.get("/tenant")
def tenant_dashboard(
     user: User = Depends(require_role("tenant")),
     db: Session = Depends(get_session),
):
     return tenant_summary(
          _rows(PropertyResponse, PropertyService.list_properties(db, user), serialize_property),
          _rows(LeaseResponse, LeaseService.list_leases(db, user), serialize_lease),
          _rows(MaintenanceResponse, MaintenanceService.list_requests(db, user), serialize_maintenance),
          _rows(PaymentResponse, PaymentService.list_for_tenant(db, user.id), serialize_payment),
     )


@router.get("/landlord")
def landlord_dashboard(
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     return landlord_summary(
          _rows(PropertyResponse, PropertyService.list_properties(db, user), serialize_property),
          _rows(LeaseResponse, LeaseService.list_leases(db, user), serialize_lease),
          _rows(ApplicationResponse, ApplicationService.list_for_landlord(db, user.id), serialize_application),
          _rows(MaintenanceResponse, MaintenanceService.list_requests(db, user), serialize_maintenance),
          _rows(PaymentResponse, PaymentService.list_for_landlord(db, user.id), serialize_payment),
     )
