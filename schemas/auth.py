# schemas/auth.py
"""
Pydantic schemas for registration, login and profile endpoints.
"""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, ConfigDict, EmailStr, Field

from .base import SnakeModel


class RegisterRequest(SnakeModel):
     email: EmailStr
     password: str = Field(..., min_length=6)
     first_name: str = Field(..., min_length=1, validation_alias=AliasChoices("first_name", "firstName"))
     last_name: str = Field(..., min_length=1, validation_alias=AliasChoices("last_name", "lastName"))
     role: str = "tenant"
     phone: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "email": "jane@example.com",
                    "password": "secret123",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "role": "landlord",
               }
          }
     )


class LoginRequest(SnakeModel):
     email: EmailStr
     password: str = Field(..., min_length=1)
     admin_id: Optional[str] = Field(None, validation_alias=AliasChoices("admin_id", "adminId"))


class ProfileUpdateRequest(SnakeModel):
     first_name: Optional[str] = Field(None, validation_alias=AliasChoices("first_name", "firstName"))
     last_name: Optional[str] = Field(None, validation_alias=AliasChoices("last_name", "lastName"))
     email: Optional[EmailStr] = None
     phone: Optional[str] = None
     current_password: Optional[str] = Field(None, validation_alias=AliasChoices("current_password", "currentPassword"))
     password: Optional[str] = Field(None, min_length=6)


class UserResponse(SnakeModel):
     id: int
     email: str
     first_name: str
     last_name: str
     phone: Optional[str] = None
     role: str
     admin_id: Optional[str] = None
     avatar: Optional[str] = None
     is_active: bool = True
     created_at: Optional[datetime] = None
     home: Optional[str] = None


class AuthResponse(SnakeModel):
     token: str
     user: UserResponse
