# routers/errors.py
"""
Translate service-layer exceptions into HTTP errors.
"""
import logging
from contextlib import contextmanager

import stripe
from fastapi import HTTPException, status
from sqlalchemy.exc import DBAPIError, IntegrityError, StatementError

from services.errors import ConflictError, InvalidCredentialsError, NotFoundError
from services.stripe_gateway import StripeNotConfiguredError

logger = logging.getLogger(__name__)


@contextmanager
def service_errors():
     """
     Usage:
          with service_errors():
               lease = LeaseService.get(db, user, lease_id)
     """
     try:
          yield
     except InvalidCredentialsError as e:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
     except PermissionError as e:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
     except NotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except ConflictError as e:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
     except IntegrityError as e:
          logger.warning("Integrity error: %s", e.orig)
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Row violates a database constraint")
     except DBAPIError:
          raise
     except StatementError as e:
          logger.warning("Rejected statement parameters: %s", e.orig)
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid value for a column")
     except StripeNotConfiguredError as e:
          raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
     except stripe.StripeError as e:
          logger.error("Stripe error: %s", e.user_message or e)
          raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.user_message or str(e))
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
