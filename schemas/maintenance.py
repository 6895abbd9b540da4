# schemas/maintenance.py
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import SnakeModel

PRIORITY_PATTERN = "^(low|medium|high|urgent)$"
STATUS_PATTERN = "^(pending|in_progress|completed|cancelled)$"


class MaintenanceCreate(SnakeModel):
     property_id: Optional[int] = Field(None, validation_alias=AliasChoices("property_id", "propertyId"))
     title: str = ""
     description: str = ""
     category: str = "other"
     priority: str = Field("medium", pattern=PRIORITY_PATTERN)

     @field_validator("property_id", mode="before")
     @classmethod
     def blank_property_id(cls, value):
          # Multipart forms send an empty string for an unset select
          if isinstance(value, str) and not value.strip():
               return None
          return value

     @field_validator("title", "description", mode="before")
     @classmethod
     def none_as_blank(cls, value):
          return "" if value is None else value


class MaintenanceUpdate(SnakeModel):
     status: Optional[str] = Field(None, pattern=STATUS_PATTERN)
     priority: Optional[str] = Field(None, pattern=PRIORITY_PATTERN)
     contractor_name: Optional[str] = Field(None, validation_alias=AliasChoices("contractor_name", "contractorName"))
     contractor_contact: Optional[str] = Field(
          None, validation_alias=AliasChoices("contractor_contact", "contractorContact")
     )
     estimated_cost: Optional[float] = Field(
          None, ge=0, validation_alias=AliasChoices("estimated_cost", "estimatedCost")
     )
     actual_cost: Optional[float] = Field(None, ge=0, validation_alias=AliasChoices("actual_cost", "actualCost"))
     notes: Optional[str] = None


class MaintenanceResponse(SnakeModel):
     id: int
     property_id: int
     tenant_id: int
     landlord_id: int
     title: str
     description: str
     category: str
     priority: str
     status: str
     contractor_name: Optional[str] = None
     contractor_contact: Optional[str] = None
     estimated_cost: Optional[float] = None
     actual_cost: Optional[float] = None
     notes: Optional[str] = None
     images: List[str] = Field(default_factory=list)
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
     property_title: Optional[str] = None
     property_address: Optional[str] = None
     tenant_name: Optional[str] = None


class MaintenanceListResponse(SnakeModel):
     data: List[MaintenanceResponse]
