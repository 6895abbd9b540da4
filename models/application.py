# models/application.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class ApplicationStatus(str, enum.Enum):
     PENDING = "pending"
     APPROVED = "approved"
     REJECTED = "rejected"


class Application(Base):
     """
     Rental application from a tenant for a property.
     Approval turns it into a lease.
     """
     __tablename__ = "applications"

     id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     status = Column(String(20), default=ApplicationStatus.PENDING.value, nullable=False, index=True)
     message = Column(Text, nullable=True)

     approved_at = Column(DateTime, nullable=True)
     rejected_at = Column(DateTime, nullable=True)
     rejection_reason = Column(Text, nullable=True)
     lease_id = Column(Integer, ForeignKey("leases.id"), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     tenant = relationship("User", foreign_keys=[tenant_id])
     landlord = relationship("User", foreign_keys=[landlord_id])
     property = relationship("Property", back_populates="applications")
     lease = relationship("Lease")

     def __repr__(self):
          return f"<Application(id={self.id}, tenant_id={self.tenant_id}, status='{self.status}')>"
