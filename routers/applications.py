# routers/applications.py
"""
Rental application API.

Tenants apply for available properties; the owning landlord approves
(creating a lease) or rejects.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_role
from models import User
from routers.errors import service_errors
from schemas.application import (
     ApplicationApprove,
     ApplicationCreate,
     ApplicationListResponse,
     ApplicationReject,
     ApplicationResponse,
)
from services.application_service import ApplicationService, serialize_application

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post(
     "/apply",
     response_model=ApplicationResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Apply for a property (tenant)",
)
def apply(
     body: ApplicationCreate,
     user: User = Depends(require_role("tenant")),
     db: Session = Depends(get_session),
):
     with service_errors():
          application = ApplicationService.apply(db, user, body.property_id, body.message)
     db.commit()
     return serialize_application(application)


@router.get("/tenant", response_model=ApplicationListResponse)
def tenant_applications(
     user: User = Depends(require_role("tenant")),
     db: Session = Depends(get_session),
):
     applications = ApplicationService.list_for_tenant(db, user.id)
     return {"applications": [serialize_application(a) for a in applications]}


@router.get("/landlord", response_model=ApplicationListResponse)
def landlord_applications(
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     applications = ApplicationService.list_for_landlord(db, user.id)
     return {"applications": [serialize_application(a) for a in applications]}


@router.post("/{application_id}/approve", response_model=ApplicationResponse)
def approve(
     application_id: int,
     body: ApplicationApprove,
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     """
     Approve a pending application.

     - **startDate** / **endDate**: lease period (end after start)
     - **monthlyRent**: agreed rent, greater than 0
     - **depositAmount**: security deposit (optional)
     - **terms**: free-text lease terms (optional)
     """
     with service_errors():
          application = ApplicationService.approve(
               db,
               user,
               application_id,
               start_date=body.start_date,
               end_date=body.end_date,
               monthly_rent=body.monthly_rent,
               deposit_amount=body.deposit_amount,
               terms=body.terms,
          )
     db.commit()
     return serialize_application(application)


@router.post("/{application_id}/reject", response_model=ApplicationResponse)
def reject(
     application_id: int,
     body: Optional[ApplicationReject] = None,
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     with service_errors():
          application = ApplicationService.reject(db, user, application_id, reason=body.reason if body else None)
     db.commit()
     return serialize_application(application)
