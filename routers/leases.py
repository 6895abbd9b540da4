# routers/leases.py
"""
Lease API routes.

Role-based access:
- Tenant: own leases
- Landlord: leases on own properties (create, update, terminate)
- Admin: everything, plus the expiry sweep
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_role
from models import User
from routers.errors import service_errors
from schemas.lease import LeaseCreate, LeaseListResponse, LeaseResponse, LeaseUpdate
from services.lease_service import LeaseService, serialize_lease

router = APIRouter(prefix="/api/leases", tags=["leases"])


@router.get("", response_model=LeaseListResponse, summary="List leases")
def list_leases(
     property_id: Optional[int] = Query(None, description="Filter by property ID"),
     tenant_id: Optional[int] = Query(None, description="Filter by tenant ID"),
     status: Optional[str] = Query(None, pattern="^(pending|active|expired|terminated)$"),
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     leases = LeaseService.list_leases(db, user, property_id=property_id, tenant_id=tenant_id, status=status)
     return {"data": [serialize_lease(lease) for lease in leases]}


@router.post("/expire", summary="Expire ended leases (admin)")
def expire_leases(
     user: User = Depends(require_role("admin")),
     db: Session = Depends(get_session),
):
     expired = LeaseService.expire_ended_leases(db)
     db.commit()
     return {"expired": expired}


@router.get("/{lease_id}", response_model=LeaseResponse)
def get_lease(
     lease_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          lease = LeaseService.get(db, user, lease_id)
     return serialize_lease(lease)


@router.post(
     "",
     response_model=LeaseResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a lease (landlord)",
)
def create_lease(
     body: LeaseCreate,
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     with service_errors():
          lease = LeaseService.create(db, user, **body.model_dump())
     db.commit()
     return serialize_lease(lease)


@router.put("/{lease_id}", response_model=LeaseResponse)
def update_lease(
     lease_id: int,
     body: LeaseUpdate,
     user: User = Depends(require_role("landlord", "admin")),
     db: Session = Depends(get_session),
):
     with service_errors():
          lease = LeaseService.update(db, user, lease_id, body.model_dump(exclude_unset=True))
     db.commit()
     return serialize_lease(lease)


@router.delete("/{lease_id}", response_model=LeaseResponse, summary="Terminate a lease")
def terminate_lease(
     lease_id: int,
     user: User = Depends(require_role("landlord", "admin")),
     db: Session = Depends(get_session),
):
     with service_errors():
          lease = LeaseService.terminate(db, user, lease_id)
     db.commit()
     return serialize_lease(lease)
