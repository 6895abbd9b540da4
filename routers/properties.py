# routers/properties.py
"""
Property listing API.

Create and update accept either a JSON body or a multipart form carrying
``images`` files (amenities then arrive as a JSON string).
"""
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_role
from models import User
from routers.errors import service_errors
from routers.forms import read_body, validate_fields
from schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from services.property_service import PropertyService, serialize_property
from storage import delete_upload, saved_uploads

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=List[PropertyResponse], summary="List properties")
def list_properties(
     city: Optional[str] = Query(None),
     status: Optional[str] = Query(None, pattern="^(available|rented|unavailable)$"),
     property_type: Optional[str] = Query(None),
     min_rent: Optional[float] = Query(None, ge=0),
     max_rent: Optional[float] = Query(None, ge=0),
     bedrooms: Optional[int] = Query(None, ge=0),
     landlord_id: Optional[int] = Query(None),
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     """
     Landlords only see their own listings. Tenants and admins see all
     listings, optionally narrowed to one landlord.
     """
     properties = PropertyService.list_properties(
          db,
          user,
          city=city,
          status=status,
          property_type=property_type,
          min_rent=min_rent,
          max_rent=max_rent,
          bedrooms=bedrooms,
          landlord_id=landlord_id,
     )
     return [serialize_property(prop) for prop in properties]


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
     property_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          prop = PropertyService.get(db, property_id)
     return serialize_property(prop)


@router.post(
     "",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a property (landlord)",
)
def create_property(
     body: Tuple[dict, list] = Depends(read_body),
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     fields, files = body
     data = validate_fields(PropertyCreate, fields)
     with service_errors(), saved_uploads(files, "properties", user.id) as image_urls:
          prop = PropertyService.create(db, user, data.model_dump(), image_urls=image_urls)
          db.commit()
     return serialize_property(prop)


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
     property_id: int,
     body: Tuple[dict, list] = Depends(read_body),
     user: User = Depends(require_role("landlord", "admin")),
     db: Session = Depends(get_session),
):
     fields, files = body
     changes = validate_fields(PropertyUpdate, fields).model_dump(exclude_unset=True)
     with service_errors(), saved_uploads(files, "properties", user.id) as image_urls:
          prop = PropertyService.update(db, user, property_id, changes, new_image_urls=image_urls)
          db.commit()
     return serialize_property(prop)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
     property_id: int,
     user: User = Depends(require_role("landlord", "admin")),
     db: Session = Depends(get_session),
):
     with service_errors():
          images = PropertyService.delete(db, user, property_id)
     db.commit()
     for url in images:
          delete_upload(url)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
