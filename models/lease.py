# models/lease.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Date, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class LeaseStatus(str, enum.Enum):
     PENDING = "pending"
     ACTIVE = "active"
     EXPIRED = "expired"
     TERMINATED = "terminated"


class Lease(Base):
     """
     Lease model - rental agreement linking a property, tenant, and landlord.
     """
     __tablename__ = "leases"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Lease period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)

     # Pricing
     monthly_rent = Column(Numeric(12, 2), nullable=False)
     security_deposit = Column(Numeric(12, 2), default=0, nullable=False)
     utilities_cost = Column(Numeric(12, 2), default=0, nullable=False)
     payment_due_day = Column(Integer, default=1, nullable=False)

     status = Column(String(20), default=LeaseStatus.PENDING.value, nullable=False, index=True)

     # Terms
     terms = Column(Text, nullable=True)
     notes = Column(Text, nullable=True)
     lease_document_url = Column(String(500), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Declared before the relationship named ``property``
     @property
     def is_ended(self) -> bool:
          return self.status in (LeaseStatus.EXPIRED.value, LeaseStatus.TERMINATED.value)

     # Relationships
     property = relationship("Property", back_populates="leases")
     tenant = relationship("User", foreign_keys=[tenant_id])
     landlord = relationship("User", foreign_keys=[landlord_id])
     payments = relationship("Payment", back_populates="lease")

     def __repr__(self):
          return f"<Lease(id={self.id}, tenant_id={self.tenant_id}, property_id={self.property_id}, status='{self.status}')>"
