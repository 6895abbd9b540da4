# models/__init__.py
from .base import Base, utc_now
from .user import User, UserRole
from .property import Property, PropertyStatus
from .application import Application, ApplicationStatus
from .lease import Lease, LeaseStatus
from .maintenance import MaintenanceRequest, MaintenanceStatus, MaintenancePriority
from .payment import Payment, PaymentStatus, PaymentType
from .notification import Notification

__all__ = [
     "Base",
     "utc_now",
     "User",
     "UserRole",
     "Property",
     "PropertyStatus",
     "Application",
     "ApplicationStatus",
     "Lease",
     "LeaseStatus",
     "MaintenanceRequest",
     "MaintenanceStatus",
     "MaintenancePriority",
     "Payment",
     "PaymentStatus",
     "PaymentType",
     "Notification",
]
