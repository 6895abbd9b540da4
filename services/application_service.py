# services/application_service.py
"""
Application Service - rental applications and their approval into leases.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Application, ApplicationStatus, LeaseStatus, Property, PropertyStatus, User, utc_now
from services.errors import ConflictError, NotFoundError
from services.lease_service import LeaseService
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def serialize_application(application: Application) -> dict:
     tenant = application.tenant
     prop = application.property
     return {
          "id": application.id,
          "tenant_id": application.tenant_id,
          "landlord_id": application.landlord_id,
          "property_id": application.property_id,
          "status": application.status,
          "message": application.message,
          "tenant_name": tenant.full_name if tenant else None,
          "tenant_email": tenant.email if tenant else None,
          "tenant_phone": tenant.phone if tenant else None,
          "property_title": prop.title if prop else None,
          "property_address": prop.address if prop else None,
          "created_at": application.created_at,
          "updated_at": application.updated_at,
          "approved_at": application.approved_at,
          "rejected_at": application.rejected_at,
          "lease_id": application.lease_id,
          "rejection_reason": application.rejection_reason,
     }


class ApplicationService:
     """Service class for rental applications."""

     @staticmethod
     def apply(db: Session, tenant: User, property_id: int, message: str = "") -> Application:
          """
          Submit an application for an available property.

          Raises:
               NotFoundError: Property does not exist
               ValueError: Property is not available
               ConflictError: Tenant already has a pending application for it
          """
          prop = db.query(Property).filter(Property.id == property_id).first()
          if not prop:
               raise NotFoundError("Property not found")
          if prop.status != PropertyStatus.AVAILABLE.value:
               raise ValueError("Property is not available")

          existing = (
               db.query(Application)
               .filter(
                    Application.tenant_id == tenant.id,
                    Application.property_id == prop.id,
                    Application.status == ApplicationStatus.PENDING.value,
               )
               .first()
          )
          if existing:
               raise ConflictError("You already have a pending application for this property")

          application = Application(
               tenant_id=tenant.id,
               landlord_id=prop.landlord_id,
               property_id=prop.id,
               message=message,
               status=ApplicationStatus.PENDING.value,
          )
          db.add(application)
          db.flush()

          NotificationService.notify(
               db,
               prop.landlord_id,
               "application_submitted",
               "New rental application",
               f"{tenant.full_name} applied for {prop.title}.",
               related_id=application.id,
               related_type="application",
          )
          logger.info("Tenant %s applied for property %s", tenant.id, prop.id)
          return application

     @staticmethod
     def list_for_tenant(db: Session, tenant_id: int) -> List[Application]:
          return (
               db.query(Application)
               .filter(Application.tenant_id == tenant_id)
               .order_by(Application.created_at.desc(), Application.id.desc())
               .all()
          )

     @staticmethod
     def list_for_landlord(db: Session, landlord_id: int) -> List[Application]:
          return (
               db.query(Application)
               .filter(Application.landlord_id == landlord_id)
               .order_by(Application.created_at.desc(), Application.id.desc())
               .all()
          )

     @staticmethod
     def _pending_for_landlord(db: Session, landlord: User, application_id: int) -> Application:
          application = db.query(Application).filter(Application.id == application_id).first()
          if not application:
               raise NotFoundError("Application not found")
          if application.landlord_id != landlord.id:
               raise PermissionError("Not authorized to review this application")
          if application.status != ApplicationStatus.PENDING.value:
               raise ValueError(f"Application is already {application.status}")
          return application

     @staticmethod
     def approve(
          db: Session,
          landlord: User,
          application_id: int,
          start_date: date,
          end_date: date,
          monthly_rent,
          deposit_amount=0,
          terms: Optional[str] = None,
     ) -> Application:
          """
          Approve a pending application.

          Creates an active lease, marks the property rented and rejects the
          other pending applications for the same property.

          Args:
               db: SQLAlchemy database session
               landlord: Owner of the property
               application_id: Application to approve
               start_date: Lease start
               end_date: Lease end (after start_date)
               monthly_rent: Agreed rent, > 0
               deposit_amount: Security deposit
               terms: Free-text lease terms

          Returns:
               The approved Application, linked to its new lease
          """
          application = ApplicationService._pending_for_landlord(db, landlord, application_id)
          if end_date <= start_date:
               raise ValueError("End date must be after start date")
          if monthly_rent is None or monthly_rent <= 0:
               raise ValueError("Monthly rent must be greater than 0")

          lease = LeaseService.create(
               db,
               landlord,
               property_id=application.property_id,
               tenant_id=application.tenant_id,
               start_date=start_date,
               end_date=end_date,
               monthly_rent=monthly_rent,
               security_deposit=deposit_amount or 0,
               terms=terms,
               notify=False,
          )
          lease.status = LeaseStatus.ACTIVE.value

          now = utc_now()
          application.status = ApplicationStatus.APPROVED.value
          application.approved_at = now
          application.lease_id = lease.id

          others = (
               db.query(Application)
               .filter(
                    Application.property_id == application.property_id,
                    Application.id != application.id,
                    Application.status == ApplicationStatus.PENDING.value,
               )
               .all()
          )
          for other in others:
               other.status = ApplicationStatus.REJECTED.value
               other.rejected_at = now
               other.rejection_reason = "Property has been rented"

          NotificationService.notify(
               db,
               application.tenant_id,
               "application_approved",
               "Application approved",
               f"Your application for {application.property.title} was approved.",
               related_id=lease.id,
               related_type="lease",
          )
          db.flush()
          logger.info(
               "Application %s approved; lease %s, %d competing applications rejected",
               application.id,
               lease.id,
               len(others),
          )
          return application

     @staticmethod
     def reject(db: Session, landlord: User, application_id: int, reason: Optional[str] = None) -> Application:
          application = ApplicationService._pending_for_landlord(db, landlord, application_id)
          application.status = ApplicationStatus.REJECTED.value
          application.rejected_at = utc_now()
          application.rejection_reason = reason

          message = f"Your application for {application.property.title} was rejected."
          if reason:
               message = f"{message} Reason: {reason}"
          NotificationService.notify(
               db,
               application.tenant_id,
               "application_rejected",
               "Application rejected",
               message,
               related_id=application.id,
               related_type="application",
          )
          db.flush()
          logger.info("Application %s rejected", application.id)
          return application
