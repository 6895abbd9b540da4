# utils/firebase.py
"""
Firebase Admin SDK helpers for AUTH_PROVIDER=firebase.
"""
import logging
import os

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials

from config import get_settings

logger = logging.getLogger(__name__)


def init_firebase() -> None:
     """Initialize the default Firebase app once."""
     try:
          firebase_admin.get_app()
          return
     except ValueError:
          pass

     cred_path = get_settings().google_application_credentials
     if cred_path and os.path.exists(cred_path):
          firebase_admin.initialize_app(credentials.Certificate(cred_path))
     else:
          # Application default credentials (Cloud Run, GCE)
          firebase_admin.initialize_app()
     logger.info("Firebase Admin initialized")


def verify_id_token(token: str) -> dict:
     """
     Verify a Firebase ID token.

     Returns:
          Decoded claims (uid, email, ...)

     Raises:
          ValueError: Token is malformed, expired, revoked or not ours
     """
     init_firebase()
     try:
          return firebase_auth.verify_id_token(token)
     except (firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError, firebase_auth.RevokedIdTokenError) as e:
          raise ValueError(str(e)) from e
