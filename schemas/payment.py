# schemas/payment.py
"""
Pydantic schemas for payment requests and the Stripe checkout flow.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from .base import CamelModel

PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class PaymentCreate(CamelModel):
     """Request body for POST /payments/create (landlord)."""

     tenant_id: int = Field(..., gt=0)
     property_id: int = Field(..., gt=0)
     period: str = Field(..., pattern=PERIOD_PATTERN, description="Billing month, YYYY-MM")
     rent_amount: float = Field(0, ge=0)
     utilities_amount: float = Field(0, ge=0)
     deposit_amount: float = Field(0, ge=0)
     description: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "tenantId": 2,
                    "propertyId": 1,
                    "period": "2026-10",
                    "rentAmount": 1200.00,
                    "utilitiesAmount": 80.00,
                    "depositAmount": 0,
                    "description": "October rent",
               }
          }
     )


class PaymentResponse(CamelModel):
     id: int
     lease_id: Optional[int] = None
     tenant_id: int
     landlord_id: int
     property_id: int
     rent_amount: float = 0
     utilities_amount: float = 0
     deposit_amount: float = 0
     total_amount: float
     amount: float
     currency: str
     period: str
     type: str
     status: str
     description: Optional[str] = None
     is_first_payment: bool = False
     due_date: Optional[date] = None
     stripe_payment_intent_id: Optional[str] = None
     client_secret: Optional[str] = None
     paid_at: Optional[datetime] = None
     created_at: Optional[datetime] = None

     # Joined fields
     tenant_name: Optional[str] = None
     tenant_email: Optional[str] = None
     property_title: Optional[str] = None
     property_address: Optional[str] = None
     property_city: Optional[str] = None
     property_state: Optional[str] = None


class PaymentListResponse(CamelModel):
     payments: List[PaymentResponse]


class ExistingPaymentsResponse(CamelModel):
     has_existing_payments: bool


class CheckoutResponse(CamelModel):
     """Response for POST /payments/pay/{id}."""

     client_secret: str = Field(..., description="Stripe PaymentIntent client secret for Stripe.js")
     payment_intent_id: str


class SyncResponse(CamelModel):
     id: int
     status: str
     stripe_status: str


class TestIntentRequest(CamelModel):
     amount: int = Field(..., gt=0, description="Amount in minor units")
