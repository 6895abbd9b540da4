# models/payment.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Date, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utc_now


class PaymentStatus(str, enum.Enum):
     """Enumeration for payment status."""
     PENDING = "pending"
     PAID = "paid"
     FAILED = "failed"
     CANCELLED = "cancelled"


class PaymentType(str, enum.Enum):
     RENT = "rent"
     UTILITIES = "utilities"
     DEPOSIT = "deposit"
     COMBINED = "combined"


class Payment(Base):
     """
     Payment model - a billable charge (rent/utilities/deposit) requested by a
     landlord and settled by the tenant through a Stripe PaymentIntent.
     """
     __tablename__ = "payments"
     __hidden_columns__ = ("client_secret",)

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     lease_id = Column(Integer, ForeignKey("leases.id", ondelete="SET NULL"), nullable=True, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)

     # Amounts
     rent_amount = Column(Numeric(12, 2), default=0, nullable=False)
     utilities_amount = Column(Numeric(12, 2), default=0, nullable=False)
     deposit_amount = Column(Numeric(12, 2), default=0, nullable=False)
     total_amount = Column(Numeric(12, 2), nullable=False)
     currency = Column(String(3), default="usd", nullable=False)

     period = Column(String(7), nullable=False, index=True)  # YYYY-MM
     type = Column(String(20), default=PaymentType.RENT.value, nullable=False)
     status = Column(String(20), default=PaymentStatus.PENDING.value, nullable=False, index=True)
     description = Column(Text, nullable=True)
     is_first_payment = Column(Boolean, default=False, nullable=False)
     due_date = Column(Date, nullable=True)

     # Stripe
     stripe_payment_intent_id = Column(String(255), nullable=True, unique=True, index=True)
     client_secret = Column(String(255), nullable=True)

     # Timestamps
     paid_at = Column(DateTime, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     lease = relationship("Lease", back_populates="payments")
     tenant = relationship("User", foreign_keys=[tenant_id])
     landlord = relationship("User", foreign_keys=[landlord_id])
     property = relationship("Property")

     def __repr__(self):
          return f"<Payment(id={self.id}, total={self.total_amount}, status='{self.status}', period='{self.period}')>"

     def mark_as_paid(self) -> None:
          """Mark the payment as paid."""
          self.status = PaymentStatus.PAID.value
          self.paid_at = utc_now()

     def mark_as_failed(self) -> None:
          self.status = PaymentStatus.FAILED.value

     def mark_as_cancelled(self) -> None:
          self.status = PaymentStatus.CANCELLED.value
