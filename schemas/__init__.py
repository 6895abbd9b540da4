# schemas/__init__.py
from .auth import RegisterRequest, LoginRequest, ProfileUpdateRequest, UserResponse, AuthResponse
from .property import PropertyCreate, PropertyUpdate, PropertyResponse
from .application import (
     ApplicationCreate,
     ApplicationApprove,
     ApplicationReject,
     ApplicationResponse,
     ApplicationListResponse,
)
from .lease import LeaseCreate, LeaseUpdate, LeaseResponse, LeaseListResponse
from .maintenance import MaintenanceCreate, MaintenanceUpdate, MaintenanceResponse, MaintenanceListResponse
from .notification import NotificationResponse, NotificationListResponse, UnreadCountResponse
from .payment import (
     PaymentCreate,
     PaymentResponse,
     PaymentListResponse,
     ExistingPaymentsResponse,
     CheckoutResponse,
     SyncResponse,
     TestIntentRequest,
)
from .admin import CollectionResponse, OverviewResponse

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "ProfileUpdateRequest",
     "UserResponse",
     "AuthResponse",
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "ApplicationCreate",
     "ApplicationApprove",
     "ApplicationReject",
     "ApplicationResponse",
     "ApplicationListResponse",
     "LeaseCreate",
     "LeaseUpdate",
     "LeaseResponse",
     "LeaseListResponse",
     "MaintenanceCreate",
     "MaintenanceUpdate",
     "MaintenanceResponse",
     "MaintenanceListResponse",
     "NotificationResponse",
     "NotificationListResponse",
     "UnreadCountResponse",
     "PaymentCreate",
     "PaymentResponse",
     "PaymentListResponse",
     "ExistingPaymentsResponse",
     "CheckoutResponse",
     "SyncResponse",
     "TestIntentRequest",
     "CollectionResponse",
     "OverviewResponse",
]
