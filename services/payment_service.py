# services/payment_service.py
"""
Payment Service - Business logic layer for payment requests.

Landlords bill tenants (rent, utilities, deposit) per period; tenants settle
through a Stripe PaymentIntent created on demand.
"""
import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from config import get_settings
from models import Payment, PaymentStatus, PaymentType, Property, User, UserRole
from services import stripe_gateway
from services.errors import NotFoundError
from services.lease_service import LeaseService
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)

# Stripe PaymentIntent status -> local payment status
STRIPE_STATUS_MAP = {
     "succeeded": PaymentStatus.PAID.value,
     "canceled": PaymentStatus.CANCELLED.value,
}


def serialize_payment(payment: Payment, include_secret: bool = False) -> dict:
     tenant = payment.tenant
     prop = payment.property
     total = float(payment.total_amount)
     return {
          "id": payment.id,
          "lease_id": payment.lease_id,
          "tenant_id": payment.tenant_id,
          "landlord_id": payment.landlord_id,
          "property_id": payment.property_id,
          "rent_amount": float(payment.rent_amount or 0),
          "utilities_amount": float(payment.utilities_amount or 0),
          "deposit_amount": float(payment.deposit_amount or 0),
          "total_amount": total,
          "amount": total,
          "currency": payment.currency,
          "period": payment.period,
          "type": payment.type,
          "status": payment.status,
          "description": payment.description,
          "is_first_payment": bool(payment.is_first_payment),
          "due_date": payment.due_date,
          "stripe_payment_intent_id": payment.stripe_payment_intent_id,
          "client_secret": payment.client_secret if include_secret else None,
          "paid_at": payment.paid_at,
          "created_at": payment.created_at,
          "tenant_name": tenant.full_name if tenant else None,
          "tenant_email": tenant.email if tenant else None,
          "property_title": prop.title if prop else None,
          "property_address": prop.address if prop else None,
          "property_city": prop.city if prop else None,
          "property_state": prop.state if prop else None,
     }


def payment_type_for(rent, utilities, deposit) -> str:
     """Single non-zero component names the type; several make it combined."""
     parts = [
          name
          for name, value in (
               (PaymentType.RENT.value, rent),
               (PaymentType.UTILITIES.value, utilities),
               (PaymentType.DEPOSIT.value, deposit),
          )
          if value and value > 0
     ]
     if len(parts) == 1:
          return parts[0]
     return PaymentType.COMBINED.value


def due_date_for(period: str, due_day: int) -> date:
     """'2026-10', 5 -> 2026-10-05 (clamped to the month's last day)."""
     year, month = (int(part) for part in period.split("-"))
     last_day = calendar.monthrange(year, month)[1]
     return date(year, month, min(max(due_day or 1, 1), last_day))


class PaymentService:
     """Service class for payment-related business logic."""

     @staticmethod
     def has_existing_payments(db: Session, tenant_id: int, property_id: int) -> bool:
          """Any non-cancelled payment between this tenant and property."""
          return (
               db.query(Payment)
               .filter(
                    Payment.tenant_id == tenant_id,
                    Payment.property_id == property_id,
                    Payment.status != PaymentStatus.CANCELLED.value,
               )
               .first()
               is not None
          )

     @staticmethod
     def create_payment(
          db: Session,
          landlord: User,
          tenant_id: int,
          property_id: int,
          period: str,
          rent_amount=0,
          utilities_amount=0,
          deposit_amount=0,
          description: Optional[str] = None,
     ) -> Payment:
          """
          Create a payment request for a tenant.

          Args:
               db: SQLAlchemy database session
               landlord: Landlord issuing the request
               tenant_id: Tenant being billed
               property_id: Property the charge is for
               period: Billing month, YYYY-MM
               rent_amount: Rent component
               utilities_amount: Utilities component
               deposit_amount: Security deposit (first payment only)
               description: Free text shown to the tenant

          Returns:
               Created Payment object

          Raises:
               ValueError: Zero total, or deposit on a non-first payment
               PermissionError: Landlord does not own the property
               NotFoundError: Property missing
          """
          prop = db.query(Property).filter(Property.id == property_id).first()
          if not prop:
               raise NotFoundError("Property not found")
          if prop.landlord_id != landlord.id:
               raise PermissionError("Not authorized to bill for this property")

          lease = LeaseService.active_lease_for(db, tenant_id, property_id)
          if not lease:
               raise ValueError("Tenant does not have an active lease for this property")

          rent = Decimal(str(rent_amount or 0))
          utilities = Decimal(str(utilities_amount or 0))
          deposit = Decimal(str(deposit_amount or 0))
          total = rent + utilities + deposit
          if total <= 0:
               raise ValueError("Total amount must be greater than 0")

          is_first = not PaymentService.has_existing_payments(db, tenant_id, property_id)
          if deposit > 0 and not is_first:
               raise ValueError("Deposit can only be included in the first payment")

          payment = Payment(
               lease_id=lease.id,
               tenant_id=tenant_id,
               landlord_id=landlord.id,
               property_id=property_id,
               rent_amount=rent,
               utilities_amount=utilities,
               deposit_amount=deposit,
               total_amount=total,
               currency=get_settings().stripe_currency,
               period=period,
               type=payment_type_for(rent, utilities, deposit),
               status=PaymentStatus.PENDING.value,
               description=description,
               is_first_payment=is_first,
               due_date=due_date_for(period, lease.payment_due_day),
          )
          db.add(payment)
          db.flush()

          NotificationService.notify(
               db,
               tenant_id,
               "payment_requested",
               "New payment request",
               f"{prop.title}: {payment.currency.upper()} {total:.2f} due {payment.due_date.isoformat()}",
               related_id=payment.id,
               related_type="payment",
          )
          logger.info("Payment %s created: %s %s for tenant %s", payment.id, payment.type, total, tenant_id)
          return payment

     @staticmethod
     def list_for_tenant(db: Session, tenant_id: int) -> List[Payment]:
          return (
               db.query(Payment)
               .filter(Payment.tenant_id == tenant_id)
               .order_by(Payment.created_at.desc(), Payment.id.desc())
               .all()
          )

     @staticmethod
     def list_for_landlord(db: Session, landlord_id: int) -> List[Payment]:
          return (
               db.query(Payment)
               .filter(Payment.landlord_id == landlord_id)
               .order_by(Payment.created_at.desc(), Payment.id.desc())
               .all()
          )

     @staticmethod
     def get(db: Session, user: User, payment_id: int) -> Payment:
          payment = db.query(Payment).filter(Payment.id == payment_id).first()
          if not payment:
               raise NotFoundError("Payment not found")
          if user.role != UserRole.ADMIN.value and user.id not in (payment.tenant_id, payment.landlord_id):
               raise PermissionError("Not authorized to view this payment")
          return payment

     @staticmethod
     def start_checkout(db: Session, tenant: User, payment_id: int) -> Payment:
          """
          Attach a Stripe PaymentIntent to a pending payment.

          An intent is created at most once per payment; repeat calls hand
          back the stored client secret.
          """
          payment = PaymentService.get(db, tenant, payment_id)
          if payment.tenant_id != tenant.id:
               raise PermissionError("Only the billed tenant can pay this payment")
          if payment.status == PaymentStatus.PAID.value:
               raise ValueError("Payment already completed")
          if payment.status != PaymentStatus.PENDING.value:
               raise ValueError(f"Payment is {payment.status}")

          if payment.stripe_payment_intent_id and payment.client_secret:
               return payment

          intent = stripe_gateway.create_payment_intent(
               payment.total_amount,
               currency=payment.currency,
               metadata={
                    "paymentId": payment.id,
                    "tenantId": payment.tenant_id,
                    "landlordId": payment.landlord_id,
                    "propertyId": payment.property_id,
                    "period": payment.period,
               },
               description=payment.description or f"{payment.type} payment {payment.period}",
          )
          payment.stripe_payment_intent_id = intent["id"]
          payment.client_secret = intent["client_secret"]
          db.flush()
          return payment

     @staticmethod
     def apply_stripe_status(db: Session, payment: Payment, stripe_status: str) -> Payment:
          """Move a payment to the local status matching a PaymentIntent status."""
          new_status = STRIPE_STATUS_MAP.get(stripe_status)
          if not new_status or new_status == payment.status:
               return payment
          if payment.status == PaymentStatus.PAID.value:
               return payment

          if new_status == PaymentStatus.PAID.value:
               payment.mark_as_paid()
               NotificationService.notify(
                    db,
                    payment.landlord_id,
                    "payment_received",
                    "Payment received",
                    f"Payment of {payment.currency.upper()} {float(payment.total_amount):.2f} for {payment.period} was received.",
                    related_id=payment.id,
                    related_type="payment",
               )
          else:
               payment.mark_as_cancelled()
          db.flush()
          logger.info("Payment %s is now %s (stripe: %s)", payment.id, payment.status, stripe_status)
          return payment

     @staticmethod
     def sync(db: Session, user: User, payment_id: int):
          """
          Refresh a payment from its PaymentIntent.

          Returns:
               (payment, stripe_status)
          """
          payment = PaymentService.get(db, user, payment_id)
          if not payment.stripe_payment_intent_id:
               raise ValueError("No payment intent for this payment")
          intent = stripe_gateway.retrieve_payment_intent(payment.stripe_payment_intent_id)
          stripe_status = intent["status"]
          PaymentService.apply_stripe_status(db, payment, stripe_status)
          return payment, stripe_status

     @staticmethod
     def cancel(db: Session, landlord: User, payment_id: int) -> Payment:
          payment = PaymentService.get(db, landlord, payment_id)
          if payment.landlord_id != landlord.id:
               raise PermissionError("Only the landlord can cancel this payment")
          if payment.status != PaymentStatus.PENDING.value:
               raise ValueError(f"Only pending payments can be cancelled (payment is {payment.status})")

          if payment.stripe_payment_intent_id:
               stripe_gateway.cancel_payment_intent(payment.stripe_payment_intent_id)
          payment.mark_as_cancelled()
          db.flush()
          logger.info("Payment %s cancelled by landlord %s", payment.id, landlord.id)
          return payment

     @staticmethod
     def handle_webhook_event(db: Session, event) -> Optional[Payment]:
          """
          Apply a verified Stripe event.

          Returns:
               The affected payment, or None when the event is not ours
          """
          event_type = event["type"]
          intent = event["data"]["object"]
          payment = (
               db.query(Payment)
               .filter(Payment.stripe_payment_intent_id == intent["id"])
               .first()
          )
          if not payment:
               logger.info("Webhook %s for unknown intent %s ignored", event_type, intent["id"])
               return None

          if event_type == "payment_intent.succeeded":
               PaymentService.apply_stripe_status(db, payment, "succeeded")
          elif event_type == "payment_intent.canceled":
               PaymentService.apply_stripe_status(db, payment, "canceled")
          elif event_type == "payment_intent.payment_failed":
               if payment.status == PaymentStatus.PENDING.value:
                    payment.mark_as_failed()
                    db.flush()
                    logger.warning("Payment %s failed", payment.id)
          else:
               return None
          return payment
