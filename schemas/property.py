# schemas/property.py
"""
Pydantic schemas for property listings.
"""
import json
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import SnakeModel


def _coerce_amenities(value):
     """Accept a list, a JSON-encoded list, or a comma separated string."""
     if value is None or isinstance(value, list):
          return value
     if isinstance(value, str):
          text = value.strip()
          if not text:
               return []
          if text.startswith("["):
               return json.loads(text)
          return [item.strip() for item in text.split(",") if item.strip()]
     return value


class PropertyBase(SnakeModel):
     title: str = Field(..., min_length=1, max_length=255)
     description: Optional[str] = None
     address: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     zip_code: Optional[str] = Field(None, validation_alias=AliasChoices("zip_code", "zipCode"))
     property_type: Optional[str] = Field(None, validation_alias=AliasChoices("property_type", "propertyType"))
     bedrooms: int = Field(1, ge=0)
     bathrooms: int = Field(1, ge=0)
     square_feet: Optional[int] = Field(None, ge=0, validation_alias=AliasChoices("square_feet", "squareFeet"))
     monthly_rent: float = Field(
          ...,
          gt=0,
          validation_alias=AliasChoices("monthly_rent", "monthlyRent", "rent_amount"),
     )
     security_deposit: Optional[float] = Field(
          None,
          ge=0,
          validation_alias=AliasChoices("security_deposit", "securityDeposit"),
     )
     amenities: List[str] = Field(default_factory=list)
     utilities_included: bool = False
     pet_friendly: bool = False
     parking_available: bool = False

     @field_validator("amenities", mode="before")
     @classmethod
     def split_amenities(cls, value):
          return _coerce_amenities(value)


class PropertyCreate(PropertyBase):
     """Schema for creating a property (landlord only)."""


class PropertyUpdate(SnakeModel):
     """Partial update: only provided fields change."""
     title: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = None
     address: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     zip_code: Optional[str] = Field(None, validation_alias=AliasChoices("zip_code", "zipCode"))
     property_type: Optional[str] = Field(None, validation_alias=AliasChoices("property_type", "propertyType"))
     bedrooms: Optional[int] = Field(None, ge=0)
     bathrooms: Optional[int] = Field(None, ge=0)
     square_feet: Optional[int] = Field(None, ge=0, validation_alias=AliasChoices("square_feet", "squareFeet"))
     monthly_rent: Optional[float] = Field(
          None,
          gt=0,
          validation_alias=AliasChoices("monthly_rent", "monthlyRent", "rent_amount"),
     )
     security_deposit: Optional[float] = Field(
          None,
          ge=0,
          validation_alias=AliasChoices("security_deposit", "securityDeposit"),
     )
     amenities: Optional[List[str]] = None
     utilities_included: Optional[bool] = None
     pet_friendly: Optional[bool] = None
     parking_available: Optional[bool] = None
     status: Optional[str] = Field(None, pattern="^(available|rented|unavailable)$")

     @field_validator("amenities", mode="before")
     @classmethod
     def split_amenities(cls, value):
          return _coerce_amenities(value)


class PropertyResponse(SnakeModel):
     id: int
     landlord_id: int
     title: str
     description: Optional[str] = None
     address: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     zip_code: Optional[str] = None
     property_type: Optional[str] = None
     bedrooms: int
     bathrooms: int
     square_feet: Optional[int] = None
     monthly_rent: float
     rent_amount: float
     security_deposit: float = 0
     amenities: List[str] = Field(default_factory=list)
     images: List[str] = Field(default_factory=list)
     utilities_included: bool
     pet_friendly: bool
     parking_available: bool
     status: str
     landlord_name: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
