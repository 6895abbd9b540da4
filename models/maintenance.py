# models/maintenance.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class MaintenanceStatus(str, enum.Enum):
     PENDING = "pending"
     IN_PROGRESS = "in_progress"
     COMPLETED = "completed"
     CANCELLED = "cancelled"


class MaintenancePriority(str, enum.Enum):
     LOW = "low"
     MEDIUM = "medium"
     HIGH = "high"
     URGENT = "urgent"


CLOSED_MAINTENANCE_STATUSES = (MaintenanceStatus.COMPLETED.value, MaintenanceStatus.CANCELLED.value)


class MaintenanceRequest(Base):
     """
     Tenant-submitted issue ticket for a leased property.
     """
     __tablename__ = "maintenance_requests"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=False)
     category = Column(String(50), default="other", nullable=False)  # plumbing, electrical, appliance, other
     priority = Column(String(20), default=MaintenancePriority.MEDIUM.value, nullable=False)
     status = Column(String(20), default=MaintenanceStatus.PENDING.value, nullable=False, index=True)

     # Contractor / cost tracking (landlord side)
     contractor_name = Column(String(200), nullable=True)
     contractor_contact = Column(String(200), nullable=True)
     estimated_cost = Column(Numeric(12, 2), nullable=True)
     actual_cost = Column(Numeric(12, 2), nullable=True)
     notes = Column(Text, nullable=True)
     images = Column(Text, nullable=True)  # JSON list of URLs

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Declared before the relationship named ``property``
     @property
     def is_closed(self) -> bool:
          return self.status in CLOSED_MAINTENANCE_STATUSES

     # Relationships
     property = relationship("Property", back_populates="maintenance_requests")
     tenant = relationship("User", foreign_keys=[tenant_id])

     def __repr__(self):
          return f"<MaintenanceRequest(id={self.id}, status='{self.status}', priority='{self.priority}')>"
