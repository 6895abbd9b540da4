# services/__init__.py
from .auth_service import AuthService
from .property_service import PropertyService
from .application_service import ApplicationService
from .lease_service import LeaseService
from .maintenance_service import MaintenanceService
from .notification_service import NotificationService
from .payment_service import PaymentService
from .admin_service import AdminService

__all__ = [
     "AuthService",
     "PropertyService",
     "ApplicationService",
     "LeaseService",
     "MaintenanceService",
     "NotificationService",
     "PaymentService",
     "AdminService",
]
