# services/maintenance_service.py
"""
Maintenance Service - tenant issue tickets and landlord follow-up.
"""
import json
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models import MaintenanceRequest, Property, User, UserRole
from models.property import json_list
from services.errors import NotFoundError
from services.lease_service import LeaseService
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)

# Fields that stay editable once a request is completed or cancelled
POST_CLOSE_FIELDS = {"notes", "actual_cost"}


def serialize_maintenance(request: MaintenanceRequest) -> dict:
     prop = request.property
     tenant = request.tenant
     return {
          "id": request.id,
          "property_id": request.property_id,
          "tenant_id": request.tenant_id,
          "landlord_id": request.landlord_id,
          "title": request.title,
          "description": request.description,
          "category": request.category,
          "priority": request.priority,
          "status": request.status,
          "contractor_name": request.contractor_name,
          "contractor_contact": request.contractor_contact,
          "estimated_cost": float(request.estimated_cost) if request.estimated_cost is not None else None,
          "actual_cost": float(request.actual_cost) if request.actual_cost is not None else None,
          "notes": request.notes,
          "images": json_list(request.images),
          "created_at": request.created_at,
          "updated_at": request.updated_at,
          "property_title": prop.title if prop else None,
          "property_address": prop.address if prop else None,
          "tenant_name": tenant.full_name if tenant else None,
     }


def _can_view(user: User, request: MaintenanceRequest) -> bool:
     return user.role == UserRole.ADMIN.value or user.id in (request.tenant_id, request.landlord_id)


class MaintenanceService:
     """Service class for maintenance requests."""

     @staticmethod
     def list_requests(
          db: Session,
          user: User,
          status: Optional[str] = None,
          priority: Optional[str] = None,
          property_id: Optional[int] = None,
     ) -> List[MaintenanceRequest]:
          query = db.query(MaintenanceRequest)
          if user.role == UserRole.TENANT.value:
               query = query.filter(MaintenanceRequest.tenant_id == user.id)
          elif user.role == UserRole.LANDLORD.value:
               query = query.filter(MaintenanceRequest.landlord_id == user.id)

          if status:
               query = query.filter(MaintenanceRequest.status == status)
          if priority:
               query = query.filter(MaintenanceRequest.priority == priority)
          if property_id:
               query = query.filter(MaintenanceRequest.property_id == property_id)
          return query.order_by(MaintenanceRequest.created_at.desc(), MaintenanceRequest.id.desc()).all()

     @staticmethod
     def get(db: Session, user: User, request_id: int) -> MaintenanceRequest:
          request = db.query(MaintenanceRequest).filter(MaintenanceRequest.id == request_id).first()
          if not request:
               raise NotFoundError("Maintenance request not found")
          if not _can_view(user, request):
               raise PermissionError("Not authorized to view this request")
          return request

     @staticmethod
     def create(
          db: Session,
          tenant: User,
          property_id: Optional[int],
          title: str,
          description: str,
          category: str = "other",
          priority: str = "medium",
          image_urls: Optional[List[str]] = None,
     ) -> MaintenanceRequest:
          """
          File a maintenance request on a property the tenant currently leases.

          Raises:
               ValueError: Missing title, description or property
               NotFoundError: Property does not exist
               PermissionError: Tenant holds no active lease on the property
          """
          title = (title or "").strip()
          description = (description or "").strip()
          if not property_id or not title or not description:
               raise ValueError("Please fill in all required fields")

          prop = db.query(Property).filter(Property.id == property_id).first()
          if not prop:
               raise NotFoundError("Property not found")
          if not LeaseService.active_lease_for(db, tenant.id, prop.id):
               raise PermissionError("You can only submit requests for a property you currently lease")

          request = MaintenanceRequest(
               property_id=prop.id,
               tenant_id=tenant.id,
               landlord_id=prop.landlord_id,
               title=title,
               description=description,
               category=category or "other",
               priority=priority or "medium",
               images=json.dumps(image_urls or []),
          )
          db.add(request)
          db.flush()

          NotificationService.notify(
               db,
               prop.landlord_id,
               "maintenance_created",
               "New maintenance request",
               f"{tenant.full_name} reported: {title}",
               related_id=request.id,
               related_type="maintenance",
          )
          logger.info("Maintenance request %s filed for property %s", request.id, prop.id)
          return request

     @staticmethod
     def update(db: Session, user: User, request_id: int, changes: dict) -> MaintenanceRequest:
          """
          Landlord/admin update of a request.

          Completed and cancelled requests only accept notes and actual_cost.
          """
          request = MaintenanceService.get(db, user, request_id)
          if user.role != UserRole.ADMIN.value and user.id != request.landlord_id:
               raise PermissionError("Only the landlord can update this request")

          changes = {key: value for key, value in changes.items() if value is not None}
          if not changes:
               raise ValueError("No fields to update")
          if request.is_closed:
               blocked = set(changes) - POST_CLOSE_FIELDS
               if blocked:
                    raise ValueError(
                         f"Request is {request.status}; only notes and actual cost can be changed"
                    )

          previous_status = request.status
          for field, value in changes.items():
               setattr(request, field, value)
          db.flush()

          if request.status != previous_status:
               message = f"Your request \"{request.title}\" is now {request.status.replace('_', ' ')}."
               logger.info("Maintenance %s: %s -> %s", request.id, previous_status, request.status)
          else:
               message = f"Your request \"{request.title}\" was updated."
          NotificationService.notify(
               db,
               request.tenant_id,
               "maintenance_updated",
               "Maintenance request updated",
               message,
               related_id=request.id,
               related_type="maintenance",
          )
          return request
