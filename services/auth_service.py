# services/auth_service.py
"""
Auth Service - password hashing, JWT issuing and account management.
"""
import logging
from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.orm import Session

from config import get_settings
from models import User, UserRole, utc_now
from paths import role_home_path
from services.errors import ConflictError, InvalidCredentialsError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def serialize_user(user: User) -> dict:
     return {
          "id": user.id,
          "email": user.email,
          "first_name": user.first_name,
          "last_name": user.last_name,
          "phone": user.phone,
          "role": user.role,
          "admin_id": user.admin_id,
          "avatar": user.avatar,
          "is_active": user.is_active,
          "created_at": user.created_at,
          "home": role_home_path(user.role),
     }


class AuthService:
     """Service class for authentication and profile logic."""

     @staticmethod
     def hash_password(password: str) -> str:
          return pwd_context.hash(password)

     @staticmethod
     def verify_password(password: str, hashed: Optional[str]) -> bool:
          if not hashed:
               return False
          return pwd_context.verify(password, hashed)

     @staticmethod
     def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
          """
          Issue a signed JWT for a user.

          Args:
               user: Authenticated user
               expires_minutes: Lifetime override (default: ACCESS_TOKEN_EXPIRE_MINUTES)

          Returns:
               Encoded token string
          """
          settings = get_settings()
          minutes = expires_minutes or settings.access_token_expire_minutes
          payload = {
               "sub": str(user.id),
               "email": user.email,
               "role": user.role,
               "exp": utc_now() + timedelta(minutes=minutes),
          }
          return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

     @staticmethod
     def decode_access_token(token: str) -> dict:
          """
          Decode and verify a JWT issued by create_access_token.

          Raises:
               InvalidCredentialsError: If the signature or expiry check fails
          """
          settings = get_settings()
          try:
               return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
          except JWTError as e:
               raise InvalidCredentialsError("Invalid or expired token") from e

     @staticmethod
     def get_by_email(db: Session, email: str) -> Optional[User]:
          return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

     @staticmethod
     def register(
          db: Session,
          email: str,
          password: str,
          first_name: str,
          last_name: str,
          role: str = UserRole.TENANT.value,
          phone: Optional[str] = None,
          firebase_uid: Optional[str] = None,
     ) -> User:
          """
          Create a landlord or tenant account.

          Raises:
               ValueError: If the role is not self-service or the email is taken
          """
          if role not in (UserRole.LANDLORD.value, UserRole.TENANT.value):
               raise ValueError("Invalid role")
          if AuthService.get_by_email(db, email):
               raise ValueError("Email already registered")

          user = User(
               email=email.strip().lower(),
               password=AuthService.hash_password(password),
               first_name=first_name.strip(),
               last_name=last_name.strip(),
               phone=phone,
               role=role,
               firebase_uid=firebase_uid,
          )
          db.add(user)
          db.flush()
          logger.info("Registered %s user %s", role, user.id)
          return user

     @staticmethod
     def authenticate(db: Session, email: str, password: str, admin_id: Optional[str] = None) -> User:
          """
          Check credentials; with admin_id set, only matching admins pass.

          Raises:
               InvalidCredentialsError: Unknown email or wrong password
               PermissionError: Admin sign-in rules violated or account disabled
          """
          user = AuthService.get_by_email(db, email)
          if not user or not AuthService.verify_password(password, user.password):
               logger.warning("Failed login for %s", email)
               raise InvalidCredentialsError("Invalid credentials")

          if admin_id is not None:
               if user.role != UserRole.ADMIN.value:
                    logger.warning("Non-admin %s tried the admin sign-in", user.id)
                    raise PermissionError("Only admins can log in here.")
               if not user.admin_id or user.admin_id != admin_id.strip():
                    logger.warning("Admin %s supplied a wrong admin id", user.id)
                    raise PermissionError("Invalid Admin ID.")

          if not user.is_active:
               raise PermissionError("Account is disabled")
          return user

     @staticmethod
     def update_profile(db: Session, user: User, changes: dict) -> User:
          """
          Apply profile changes. A new password needs the current one.

          Raises:
               ValueError: Nothing to update
               InvalidCredentialsError: Current password missing or wrong
               ConflictError: New email already taken
          """
          current_password = changes.pop("current_password", None)
          changes = {key: value for key, value in changes.items() if value is not None}
          if not changes:
               raise ValueError("No fields to update")

          if "password" in changes:
               if not AuthService.verify_password(current_password or "", user.password):
                    raise InvalidCredentialsError("Current password is incorrect")
               user.password = AuthService.hash_password(changes.pop("password"))

          if "email" in changes:
               email = changes.pop("email").strip().lower()
               other = AuthService.get_by_email(db, email)
               if other and other.id != user.id:
                    raise ConflictError("Email already registered")
               user.email = email

          for field, value in changes.items():
               setattr(user, field, value)
          db.flush()
          return user

     @staticmethod
     def find_or_link_firebase_user(db: Session, uid: str, email: Optional[str]) -> Optional[User]:
          """Look a Firebase identity up by uid, then by email (linking the uid)."""
          user = db.query(User).filter(User.firebase_uid == uid).first()
          if user or not email:
               return user
          user = AuthService.get_by_email(db, email)
          if user and not user.firebase_uid:
               user.firebase_uid = uid
               db.flush()
               logger.info("Linked firebase uid to user %s", user.id)
          return user
