# schemas/lease.py
"""
Pydantic schemas for leases.

Input follows the snake_case LeaseFormData shape; responses are camelCase
with joined property/party fields.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, model_validator

from .base import CamelModel, SnakeModel


class LeaseCreate(SnakeModel):
     property_id: int = Field(..., gt=0, validation_alias=AliasChoices("property_id", "propertyId"))
     tenant_id: int = Field(..., gt=0, validation_alias=AliasChoices("tenant_id", "tenantId"))
     start_date: date = Field(..., validation_alias=AliasChoices("start_date", "startDate"))
     end_date: date = Field(..., validation_alias=AliasChoices("end_date", "endDate"))
     monthly_rent: float = Field(..., gt=0, validation_alias=AliasChoices("monthly_rent", "monthlyRent"))
     security_deposit: float = Field(0, ge=0, validation_alias=AliasChoices("security_deposit", "securityDeposit"))
     utilities_cost: float = Field(0, ge=0, validation_alias=AliasChoices("utilities_cost", "utilitiesCost"))
     payment_due_day: int = Field(1, ge=1, le=28, validation_alias=AliasChoices("payment_due_day", "paymentDueDay"))
     lease_document_url: Optional[str] = Field(
          None, validation_alias=AliasChoices("lease_document_url", "leaseDocumentUrl")
     )
     terms: Optional[str] = None
     notes: Optional[str] = None

     @model_validator(mode="after")
     def check_dates(self):
          if self.end_date <= self.start_date:
               raise ValueError("End date must be after start date")
          return self


class LeaseUpdate(SnakeModel):
     start_date: Optional[date] = Field(None, validation_alias=AliasChoices("start_date", "startDate"))
     end_date: Optional[date] = Field(None, validation_alias=AliasChoices("end_date", "endDate"))
     monthly_rent: Optional[float] = Field(None, gt=0, validation_alias=AliasChoices("monthly_rent", "monthlyRent"))
     security_deposit: Optional[float] = Field(
          None, ge=0, validation_alias=AliasChoices("security_deposit", "securityDeposit")
     )
     utilities_cost: Optional[float] = Field(None, ge=0, validation_alias=AliasChoices("utilities_cost", "utilitiesCost"))
     payment_due_day: Optional[int] = Field(
          None, ge=1, le=28, validation_alias=AliasChoices("payment_due_day", "paymentDueDay")
     )
     status: Optional[str] = Field(None, pattern="^(pending|active|expired|terminated)$")
     lease_document_url: Optional[str] = Field(
          None, validation_alias=AliasChoices("lease_document_url", "leaseDocumentUrl")
     )
     terms: Optional[str] = None
     notes: Optional[str] = None


class LeaseResponse(CamelModel):
     id: int
     property_id: int
     tenant_id: int
     landlord_id: int
     start_date: date
     end_date: date
     monthly_rent: float
     security_deposit: float = 0
     utilities_cost: float = 0
     payment_due_day: int = 1
     status: str
     lease_document_url: Optional[str] = None
     terms: Optional[str] = None
     notes: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     # Joined fields
     property_title: Optional[str] = None
     property_address: Optional[str] = None
     property_city: Optional[str] = None
     tenant_name: Optional[str] = None
     tenant_email: Optional[str] = None
     tenant_phone: Optional[str] = None
     landlord_name: Optional[str] = None
     landlord_email: Optional[str] = None


class LeaseListResponse(CamelModel):
     data: List[LeaseResponse]
