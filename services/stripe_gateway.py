# services/stripe_gateway.py
"""
Thin wrapper around the Stripe PaymentIntent API.

Amounts are handed to Stripe in minor units (cents). Callers get plain
values back; stripe.StripeError propagates to the router.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import stripe

from config import get_settings

logger = logging.getLogger(__name__)


class StripeNotConfiguredError(RuntimeError):
     """STRIPE_SECRET_KEY (or the webhook secret) is missing."""


def _configure() -> None:
     settings = get_settings()
     if not settings.stripe_secret_key:
          raise StripeNotConfiguredError("Stripe is not configured")
     stripe.api_key = settings.stripe_secret_key


def to_minor_units(amount) -> int:
     """12.345 -> 1235"""
     return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_payment_intent(amount, currency: Optional[str] = None, metadata: Optional[dict] = None, description: Optional[str] = None):
     """
     Create a PaymentIntent with automatic payment methods.

     Args:
          amount: Major-unit amount (e.g. 1200.50)
          currency: ISO currency, default STRIPE_CURRENCY
          metadata: String values attached to the intent
          description: Shown in the Stripe dashboard

     Returns:
          The PaymentIntent (id, client_secret, status)
     """
     _configure()
     params = {
          "amount": to_minor_units(amount),
          "currency": (currency or get_settings().stripe_currency).lower(),
          "automatic_payment_methods": {"enabled": True},
          "metadata": {key: str(value) for key, value in (metadata or {}).items()},
     }
     if description:
          params["description"] = description
     intent = stripe.PaymentIntent.create(**params)
     logger.info("Created PaymentIntent %s for %s %s", intent["id"], params["amount"], params["currency"])
     return intent


def retrieve_payment_intent(intent_id: str):
     _configure()
     return stripe.PaymentIntent.retrieve(intent_id)


def cancel_payment_intent(intent_id: str):
     _configure()
     intent = stripe.PaymentIntent.cancel(intent_id)
     logger.info("Cancelled PaymentIntent %s", intent_id)
     return intent


def construct_webhook_event(payload: bytes, signature: str):
     """
     Verify a webhook delivery and parse it.

     Raises:
          StripeNotConfiguredError: No STRIPE_WEBHOOK_SECRET
          ValueError: Payload is not valid JSON
          stripe.SignatureVerificationError: Signature mismatch
     """
     secret = get_settings().stripe_webhook_secret
     if not secret:
          raise StripeNotConfiguredError("Webhook secret not configured")
     return stripe.Webhook.construct_event(payload, signature, secret)
