# services/property_service.py
"""
Property Service - listings owned by landlords.
"""
import json
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Lease, LeaseStatus, Payment, Property, User, UserRole
from services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def serialize_property(prop: Property) -> dict:
     monthly_rent = float(prop.monthly_rent) if prop.monthly_rent is not None else 0.0
     landlord = prop.landlord
     return {
          "id": prop.id,
          "landlord_id": prop.landlord_id,
          "title": prop.title,
          "description": prop.description,
          "address": prop.address,
          "city": prop.city,
          "state": prop.state,
          "zip_code": prop.zip_code,
          "property_type": prop.property_type,
          "bedrooms": prop.bedrooms,
          "bathrooms": prop.bathrooms,
          "square_feet": prop.square_feet,
          "monthly_rent": monthly_rent,
          "rent_amount": monthly_rent,
          "security_deposit": float(prop.security_deposit or 0),
          "amenities": prop.amenity_list,
          "images": prop.image_list,
          "utilities_included": bool(prop.utilities_included),
          "pet_friendly": bool(prop.pet_friendly),
          "parking_available": bool(prop.parking_available),
          "status": prop.status,
          "landlord_name": landlord.full_name if landlord else None,
          "created_at": prop.created_at,
          "updated_at": prop.updated_at,
     }


def _can_manage(user: User, prop: Property) -> bool:
     return user.role == UserRole.ADMIN.value or prop.landlord_id == user.id


class PropertyService:
     """Service class for property listings."""

     @staticmethod
     def list_properties(
          db: Session,
          user: User,
          city: Optional[str] = None,
          status: Optional[str] = None,
          property_type: Optional[str] = None,
          min_rent: Optional[float] = None,
          max_rent: Optional[float] = None,
          bedrooms: Optional[int] = None,
          landlord_id: Optional[int] = None,
     ) -> List[Property]:
          """
          List properties visible to a user.

          Landlords only ever see their own listings; tenants and admins see
          everything, narrowed by the optional filters.
          """
          query = db.query(Property)
          if user.role == UserRole.LANDLORD.value:
               query = query.filter(Property.landlord_id == user.id)
          elif landlord_id:
               query = query.filter(Property.landlord_id == landlord_id)

          if city:
               query = query.filter(Property.city.ilike(f"%{city}%"))
          if status:
               query = query.filter(Property.status == status)
          if property_type:
               query = query.filter(Property.property_type == property_type)
          if min_rent is not None:
               query = query.filter(Property.monthly_rent >= min_rent)
          if max_rent is not None:
               query = query.filter(Property.monthly_rent <= max_rent)
          if bedrooms is not None:
               query = query.filter(Property.bedrooms >= bedrooms)

          return query.order_by(Property.created_at.desc(), Property.id.desc()).all()

     @staticmethod
     def get(db: Session, property_id: int) -> Property:
          prop = db.query(Property).filter(Property.id == property_id).first()
          if not prop:
               raise NotFoundError("Property not found")
          return prop

     @staticmethod
     def create(db: Session, landlord: User, data: dict, image_urls: Optional[List[str]] = None) -> Property:
          """
          Create a listing for a landlord.

          Args:
               db: SQLAlchemy database session
               landlord: Owner of the listing
               data: Validated PropertyCreate fields
               image_urls: Public URLs of already stored images

          Returns:
               Created Property object
          """
          data = dict(data)
          amenities = data.pop("amenities", None) or []
          prop = Property(
               landlord_id=landlord.id,
               amenities=json.dumps(amenities),
               images=json.dumps(image_urls or []),
               **data,
          )
          db.add(prop)
          db.flush()
          logger.info("Landlord %s created property %s", landlord.id, prop.id)
          return prop

     @staticmethod
     def update(
          db: Session,
          user: User,
          property_id: int,
          changes: dict,
          new_image_urls: Optional[List[str]] = None,
     ) -> Property:
          prop = PropertyService.get(db, property_id)
          if not _can_manage(user, prop):
               raise PermissionError("Not authorized to update this property")

          for field, value in changes.items():
               if value is None:
                    continue
               if field == "amenities":
                    value = json.dumps(value)
               setattr(prop, field, value)
          if new_image_urls:
               prop.images = json.dumps(prop.image_list + list(new_image_urls))
          db.flush()
          return prop

     @staticmethod
     def delete(db: Session, user: User, property_id: int) -> List[str]:
          """
          Delete a listing and its history.

          Returns:
               Image URLs that belonged to the listing, for storage cleanup

          Raises:
               ConflictError: If the property is under an active lease
          """
          prop = PropertyService.get(db, property_id)
          if not _can_manage(user, prop):
               raise PermissionError("Not authorized to delete this property")

          active = (
               db.query(Lease)
               .filter(Lease.property_id == prop.id, Lease.status == LeaseStatus.ACTIVE.value)
               .first()
          )
          if active:
               raise ConflictError("Cannot delete a property with an active lease")

          images = prop.image_list
          db.query(Payment).filter(Payment.property_id == prop.id).delete(synchronize_session=False)
          for lease in list(prop.leases):
               db.delete(lease)
          db.delete(prop)
          db.flush()
          logger.info("Property %s deleted by user %s", property_id, user.id)
          return images
