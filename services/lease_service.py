# services/lease_service.py
"""
Lease Service - Business logic layer for lease operations.

Handles lease creation, updates, termination and expiry, and keeps the
property status in step with the lease lifecycle.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Lease, LeaseStatus, Property, PropertyStatus, User, UserRole
from services.errors import NotFoundError
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def serialize_lease(lease: Lease) -> dict:
     prop = lease.property
     tenant = lease.tenant
     landlord = lease.landlord
     return {
          "id": lease.id,
          "property_id": lease.property_id,
          "tenant_id": lease.tenant_id,
          "landlord_id": lease.landlord_id,
          "start_date": lease.start_date,
          "end_date": lease.end_date,
          "monthly_rent": float(lease.monthly_rent),
          "security_deposit": float(lease.security_deposit or 0),
          "utilities_cost": float(lease.utilities_cost or 0),
          "payment_due_day": lease.payment_due_day,
          "status": lease.status,
          "lease_document_url": lease.lease_document_url,
          "terms": lease.terms,
          "notes": lease.notes,
          "created_at": lease.created_at,
          "updated_at": lease.updated_at,
          "property_title": prop.title if prop else None,
          "property_address": prop.address if prop else None,
          "property_city": prop.city if prop else None,
          "tenant_name": tenant.full_name if tenant else None,
          "tenant_email": tenant.email if tenant else None,
          "tenant_phone": tenant.phone if tenant else None,
          "landlord_name": landlord.full_name if landlord else None,
          "landlord_email": landlord.email if landlord else None,
     }


def _is_party(user: User, lease: Lease) -> bool:
     return user.role == UserRole.ADMIN.value or user.id in (lease.tenant_id, lease.landlord_id)


def _can_manage(user: User, lease: Lease) -> bool:
     return user.role == UserRole.ADMIN.value or user.id == lease.landlord_id


class LeaseService:
     """Service class for lease-related business logic."""

     @staticmethod
     def list_leases(
          db: Session,
          user: User,
          property_id: Optional[int] = None,
          tenant_id: Optional[int] = None,
          status: Optional[str] = None,
     ) -> List[Lease]:
          query = db.query(Lease)
          if user.role == UserRole.TENANT.value:
               query = query.filter(Lease.tenant_id == user.id)
          elif user.role == UserRole.LANDLORD.value:
               query = query.filter(Lease.landlord_id == user.id)

          if property_id:
               query = query.filter(Lease.property_id == property_id)
          if tenant_id:
               query = query.filter(Lease.tenant_id == tenant_id)
          if status:
               query = query.filter(Lease.status == status)
          return query.order_by(Lease.created_at.desc(), Lease.id.desc()).all()

     @staticmethod
     def get(db: Session, user: User, lease_id: int) -> Lease:
          lease = db.query(Lease).filter(Lease.id == lease_id).first()
          if not lease:
               raise NotFoundError("Lease not found")
          if not _is_party(user, lease):
               raise PermissionError("Not authorized to view this lease")
          return lease

     @staticmethod
     def active_lease_for(db: Session, tenant_id: int, property_id: int) -> Optional[Lease]:
          return (
               db.query(Lease)
               .filter(
                    Lease.tenant_id == tenant_id,
                    Lease.property_id == property_id,
                    Lease.status == LeaseStatus.ACTIVE.value,
               )
               .order_by(Lease.start_date.desc())
               .first()
          )

     @staticmethod
     def create(
          db: Session,
          landlord: User,
          property_id: int,
          tenant_id: int,
          start_date: date,
          end_date: date,
          monthly_rent,
          security_deposit=0,
          utilities_cost=0,
          payment_due_day: int = 1,
          terms: Optional[str] = None,
          notes: Optional[str] = None,
          lease_document_url: Optional[str] = None,
          notify: bool = True,
     ) -> Lease:
          """
          Create a lease on one of the landlord's properties.

          The lease starts out active when its start date has been reached,
          pending otherwise. The property is marked rented either way.

          Args:
               db: SQLAlchemy database session
               landlord: Owner of the property
               property_id: Property being leased
               tenant_id: Tenant user ID
               start_date: First day of the lease
               end_date: Last day of the lease (after start_date)

          Returns:
               Created Lease object

          Raises:
               ValueError: Bad dates or the tenant does not exist
               PermissionError: Property belongs to someone else
          """
          if end_date <= start_date:
               raise ValueError("End date must be after start date")

          prop = db.query(Property).filter(Property.id == property_id).first()
          if not prop:
               raise NotFoundError("Property not found")
          if landlord.role != UserRole.ADMIN.value and prop.landlord_id != landlord.id:
               raise PermissionError("Not authorized to lease this property")

          tenant = db.query(User).filter(User.id == tenant_id).first()
          if not tenant or tenant.role != UserRole.TENANT.value:
               raise ValueError(f"Tenant with ID {tenant_id} not found")

          status = LeaseStatus.ACTIVE if start_date <= date.today() else LeaseStatus.PENDING
          lease = Lease(
               property_id=prop.id,
               tenant_id=tenant.id,
               landlord_id=prop.landlord_id,
               start_date=start_date,
               end_date=end_date,
               monthly_rent=monthly_rent,
               security_deposit=security_deposit or 0,
               utilities_cost=utilities_cost or 0,
               payment_due_day=payment_due_day,
               status=status.value,
               terms=terms,
               notes=notes,
               lease_document_url=lease_document_url,
          )
          db.add(lease)
          prop.status = PropertyStatus.RENTED.value
          db.flush()

          if notify:
               NotificationService.notify(
                    db,
                    tenant.id,
                    "lease_created",
                    "New lease created",
                    f"A lease for {prop.title} has been created.",
                    related_id=lease.id,
                    related_type="lease",
               )
          logger.info("Lease %s created for property %s (%s)", lease.id, prop.id, lease.status)
          return lease

     @staticmethod
     def update(db: Session, user: User, lease_id: int, changes: dict) -> Lease:
          lease = LeaseService.get(db, user, lease_id)
          if not _can_manage(user, lease):
               raise PermissionError("Not authorized to update this lease")

          changes = {key: value for key, value in changes.items() if value is not None}
          start = changes.get("start_date", lease.start_date)
          end = changes.get("end_date", lease.end_date)
          if end <= start:
               raise ValueError("End date must be after start date")

          for field, value in changes.items():
               setattr(lease, field, value)
          if "status" in changes and lease.is_ended:
               LeaseService._release_property(db, lease)
          db.flush()
          return lease

     @staticmethod
     def terminate(db: Session, user: User, lease_id: int) -> Lease:
          lease = LeaseService.get(db, user, lease_id)
          if not _can_manage(user, lease):
               raise PermissionError("Not authorized to terminate this lease")
          if lease.status == LeaseStatus.TERMINATED.value:
               raise ValueError("Lease is already terminated")

          lease.status = LeaseStatus.TERMINATED.value
          LeaseService._release_property(db, lease)
          NotificationService.notify(
               db,
               lease.tenant_id,
               "lease_terminated",
               "Lease terminated",
               f"Your lease for {lease.property.title} has been terminated.",
               related_id=lease.id,
               related_type="lease",
          )
          db.flush()
          logger.info("Lease %s terminated by user %s", lease.id, user.id)
          return lease

     @staticmethod
     def expire_ended_leases(db: Session, today: Optional[date] = None) -> int:
          """
          Mark active leases past their end date as expired.

          Args:
               db: SQLAlchemy database session
               today: Reference date (default: date.today())

          Returns:
               Number of leases marked as expired
          """
          today = today or date.today()
          ended = (
               db.query(Lease)
               .filter(Lease.status == LeaseStatus.ACTIVE.value, Lease.end_date < today)
               .all()
          )
          for lease in ended:
               lease.status = LeaseStatus.EXPIRED.value
               LeaseService._release_property(db, lease)
          db.flush()
          if ended:
               logger.info("Expired %d leases", len(ended))
          return len(ended)

     @staticmethod
     def _release_property(db: Session, lease: Lease) -> None:
          """Put the property back on the market unless another lease holds it."""
          db.flush()
          other = (
               db.query(Lease)
               .filter(
                    Lease.property_id == lease.property_id,
                    Lease.id != lease.id,
                    Lease.status == LeaseStatus.ACTIVE.value,
               )
               .first()
          )
          if not other and lease.property:
               lease.property.status = PropertyStatus.AVAILABLE.value
