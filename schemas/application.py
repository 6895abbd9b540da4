# schemas/application.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, model_validator

from .base import CamelModel


class ApplicationCreate(CamelModel):
     property_id: int = Field(..., gt=0)
     message: str = ""


class ApplicationApprove(CamelModel):
     start_date: date
     end_date: date
     monthly_rent: float = Field(..., gt=0)
     deposit_amount: float = Field(0, ge=0)
     terms: Optional[str] = None

     @model_validator(mode="after")
     def check_dates(self):
          if self.end_date <= self.start_date:
               raise ValueError("End date must be after start date")
          return self


class ApplicationReject(CamelModel):
     reason: Optional[str] = None


class ApplicationResponse(CamelModel):
     id: int
     tenant_id: int
     landlord_id: int
     property_id: int
     status: str
     message: Optional[str] = None
     tenant_name: Optional[str] = None
     tenant_email: Optional[str] = None
     tenant_phone: Optional[str] = None
     property_title: Optional[str] = None
     property_address: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
     approved_at: Optional[datetime] = None
     rejected_at: Optional[datetime] = None
     lease_id: Optional[int] = None
     rejection_reason: Optional[str] = None


class ApplicationListResponse(CamelModel):
     applications: List[ApplicationResponse]
