# routers/maintenance.py
"""
Maintenance request API.

Tenants file requests (JSON or multipart with ``images``) on properties
they lease; landlords triage and close them.
"""
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_role
from models import User
from routers.errors import service_errors
from routers.forms import read_body, validate_fields
from schemas.maintenance import (
     MaintenanceCreate,
     MaintenanceListResponse,
     MaintenanceResponse,
     MaintenanceUpdate,
     PRIORITY_PATTERN,
     STATUS_PATTERN,
)
from services.maintenance_service import MaintenanceService, serialize_maintenance
from storage import saved_uploads

router = APIRouter(prefix="/api/maintenance", tags=["maintenance"])


@router.get("", response_model=MaintenanceListResponse)
def list_requests(
     status: Optional[str] = Query(None, pattern=STATUS_PATTERN),
     priority: Optional[str] = Query(None, pattern=PRIORITY_PATTERN),
     property_id: Optional[int] = Query(None),
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     requests = MaintenanceService.list_requests(
          db, user, status=status, priority=priority, property_id=property_id
     )
     return {"data": [serialize_maintenance(r) for r in requests]}


@router.get("/{request_id}", response_model=MaintenanceResponse)
def get_request(
     request_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          request = MaintenanceService.get(db, user, request_id)
     return serialize_maintenance(request)


@router.post(
     "",
     response_model=MaintenanceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="File a maintenance request (tenant)",
)
def create_request(
     body: Tuple[dict, list] = Depends(read_body),
     user: User = Depends(require_role("tenant")),
     db: Session = Depends(get_session),
):
     fields, files = body
     data = validate_fields(MaintenanceCreate, fields)
     with service_errors():
          if not data.property_id or not data.title.strip() or not data.description.strip():
               raise ValueError("Please fill in all required fields")
          with saved_uploads(files, "maintenance", user.id) as image_urls:
               request = MaintenanceService.create(
                    db,
                    user,
                    property_id=data.property_id,
                    title=data.title,
                    description=data.description,
                    category=data.category,
                    priority=data.priority,
                    image_urls=image_urls,
               )
               db.commit()
     return serialize_maintenance(request)


@router.put("/{request_id}", response_model=MaintenanceResponse)
def update_request(
     request_id: int,
     body: MaintenanceUpdate,
     user: User = Depends(require_role("landlord", "admin")),
     db: Session = Depends(get_session),
):
     with service_errors():
          request = MaintenanceService.update(db, user, request_id, body.model_dump(exclude_unset=True))
     db.commit()
     return serialize_maintenance(request)
