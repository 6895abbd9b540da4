# dependencies.py
"""
Shared FastAPI dependencies: bearer token verification and role checks.
"""
import logging
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from config import get_settings
from database import get_session
from models import User
from services.auth_service import AuthService
from services.errors import InvalidCredentialsError

logger = logging.getLogger(__name__)


def verify_token(request: Request) -> dict:
     """
     Read and verify the bearer token.

     Returns the decoded claims: ``sub`` for local JWTs, ``uid``/``email``
     for Firebase ID tokens.
     """
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1].strip()
     if not token:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

     if get_settings().use_firebase:
          from utils.firebase import verify_id_token

          try:
               return verify_id_token(token)
          except ValueError:
               logger.warning("Rejected firebase token")
               raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

     try:
          return AuthService.decode_access_token(token)
     except InvalidCredentialsError:
          logger.warning("Rejected access token")
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def get_current_user(
     claims: dict = Depends(verify_token),
     db: Session = Depends(get_session),
) -> User:
     if "uid" in claims and get_settings().use_firebase:
          user = AuthService.find_or_link_firebase_user(db, claims["uid"], claims.get("email"))
     else:
          try:
               user_id = int(claims.get("sub"))
          except (TypeError, ValueError):
               user_id = None
          user = db.query(User).filter(User.id == user_id).first() if user_id else None

     if not user:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
     if not user.is_active:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is disabled")
     return user


# -----------------------------------------------------------------------------
# Role-based access control helpers
# -----------------------------------------------------------------------------

def require_role(*roles: str) -> Callable[..., User]:
     """
     Dependency factory limiting a route to the given roles.

     Usage:
          user: User = Depends(require_role("landlord"))
     """

     def checker(user: User = Depends(get_current_user)) -> User:
          if user.role not in roles:
               raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Requires role: {', '.join(roles)}",
               )
          return user

     return checker
