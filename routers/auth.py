# routers/auth.py
"""
Authentication API: registration, login and the current user's profile.
"""
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from routers.errors import service_errors
from schemas.auth import AuthResponse, LoginRequest, ProfileUpdateRequest, RegisterRequest, UserResponse
from services.auth_service import AuthService, serialize_user
from storage import delete_upload, save_upload

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
     "/register",
     response_model=AuthResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Register a landlord or tenant",
)
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     with service_errors():
          user = AuthService.register(
               db,
               email=body.email,
               password=body.password,
               first_name=body.first_name,
               last_name=body.last_name,
               role=body.role,
               phone=body.phone,
          )
     db.commit()
     return {"token": AuthService.create_access_token(user), "user": serialize_user(user)}


@router.post("/login", response_model=AuthResponse, summary="Log in")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     """
     Exchange email and password for an access token.

     Supplying **admin_id** switches to the admin sign-in, which only admits
     admins whose stored admin ID matches.
     """
     with service_errors():
          user = AuthService.authenticate(db, body.email, body.password, admin_id=body.admin_id)
     return {"token": AuthService.create_access_token(user), "user": serialize_user(user)}


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
     return serialize_user(user)


@router.put("/me", response_model=UserResponse)
def update_me(
     body: ProfileUpdateRequest,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          AuthService.update_profile(db, user, body.model_dump())
     db.commit()
     return serialize_user(user)


@router.post("/avatar")
def update_avatar(
     avatar: UploadFile = File(...),
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     previous = user.avatar
     user.avatar = save_upload(avatar, "avatars", user.id)
     db.commit()
     if previous:
          delete_upload(previous)
     return {"avatar": user.avatar}
