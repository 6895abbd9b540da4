# routers/payments.py
"""
Payment API.

Landlords create payment requests; tenants pay them through a Stripe
PaymentIntent confirmed client-side with Stripe.js. Status comes back
either through the webhook or an explicit sync.
"""
import logging

import stripe
from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from config import get_settings
from database import get_session
from dependencies import get_current_user, require_role
from models import User
from routers.errors import service_errors
from schemas.payment import (
     CheckoutResponse,
     ExistingPaymentsResponse,
     PaymentCreate,
     PaymentListResponse,
     PaymentResponse,
     SyncResponse,
     TestIntentRequest,
)
from services import stripe_gateway
from services.payment_service import PaymentService, serialize_payment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])


async def raw_body(request: Request) -> bytes:
     return await request.body()


@router.post(
     "/create",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a payment request (landlord)",
)
def create_payment(
     body: PaymentCreate,
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     """
     Bill a tenant with an active lease on one of your properties.

     - **period**: billing month, YYYY-MM
     - **rentAmount** / **utilitiesAmount** / **depositAmount**: components; the total must be > 0
     - A deposit is only accepted on the tenant's first payment for the property
     """
     with service_errors():
          payment = PaymentService.create_payment(
               db,
               user,
               tenant_id=body.tenant_id,
               property_id=body.property_id,
               period=body.period,
               rent_amount=body.rent_amount,
               utilities_amount=body.utilities_amount,
               deposit_amount=body.deposit_amount,
               description=body.description,
          )
     db.commit()
     return serialize_payment(payment)


@router.get("/check-existing/{tenant_id}/{property_id}", response_model=ExistingPaymentsResponse)
def check_existing(
     tenant_id: int,
     property_id: int,
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     return {"has_existing_payments": PaymentService.has_existing_payments(db, tenant_id, property_id)}


@router.get("/tenant", response_model=PaymentListResponse)
def tenant_payments(
     user: User = Depends(require_role("tenant")),
     db: Session = Depends(get_session),
):
     payments = PaymentService.list_for_tenant(db, user.id)
     return {"payments": [serialize_payment(p) for p in payments]}


@router.get("/landlord", response_model=PaymentListResponse)
def landlord_payments(
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     payments = PaymentService.list_for_landlord(db, user.id)
     return {"payments": [serialize_payment(p) for p in payments]}


@router.post("/webhook", summary="Stripe webhook")
def stripe_webhook(
     payload: bytes = Depends(raw_body),
     stripe_signature: str = Header("", alias="Stripe-Signature"),
     db: Session = Depends(get_session),
):
     """
     Receives PaymentIntent events from Stripe.

     The signature is checked against STRIPE_WEBHOOK_SECRET; events for
     unknown intents or of other types are acknowledged and ignored.
     """
     try:
          event = stripe_gateway.construct_webhook_event(payload, stripe_signature)
     except stripe_gateway.StripeNotConfiguredError as e:
          raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
     except stripe.SignatureVerificationError:
          logger.warning("Webhook signature verification failed")
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid signature")
     except ValueError:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payload")

     payment = PaymentService.handle_webhook_event(db, event)
     db.commit()
     return {"received": True, "paymentId": payment.id if payment else None}


@router.post("/test-intent", summary="Create a bare PaymentIntent (DEBUG only)")
def test_intent(
     body: TestIntentRequest,
     user: User = Depends(get_current_user),
):
     if not get_settings().debug:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Route not found")
     with service_errors():
          intent = stripe_gateway.create_payment_intent(
               body.amount / 100,
               metadata={"test": "true", "userId": user.id},
          )
     return {"clientSecret": intent["client_secret"], "paymentIntentId": intent["id"]}


@router.post("/pay/{payment_id}", response_model=CheckoutResponse)
def pay(
     payment_id: int,
     user: User = Depends(require_role("tenant")),
     db: Session = Depends(get_session),
):
     """
     Start (or resume) checkout for a pending payment.

     Returns the PaymentIntent client secret for Stripe.js. Calling this
     again before paying returns the same intent.
     """
     with service_errors():
          payment = PaymentService.start_checkout(db, user, payment_id)
     db.commit()
     return {"client_secret": payment.client_secret, "payment_intent_id": payment.stripe_payment_intent_id}


@router.post("/sync/{payment_id}", response_model=SyncResponse)
def sync_payment(
     payment_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          payment, stripe_status = PaymentService.sync(db, user, payment_id)
     db.commit()
     return {"id": payment.id, "status": payment.status, "stripe_status": stripe_status}


@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(
     payment_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          payment = PaymentService.get(db, user, payment_id)
     return serialize_payment(payment, include_secret=user.id == payment.tenant_id)


@router.delete("/{payment_id}", response_model=PaymentResponse, summary="Cancel a pending payment")
def cancel_payment(
     payment_id: int,
     user: User = Depends(require_role("landlord")),
     db: Session = Depends(get_session),
):
     with service_errors():
          payment = PaymentService.cancel(db, user, payment_id)
     db.commit()
     return serialize_payment(payment)
