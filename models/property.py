# models/property.py
import enum
import json

from sqlalchemy import Column, Integer, String, Numeric, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class PropertyStatus(str, enum.Enum):
     AVAILABLE = "available"
     RENTED = "rented"
     UNAVAILABLE = "unavailable"


class Property(Base):
     """
     Property model - a rentable listing owned by a landlord.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)

     # Address
     address = Column(String(255), nullable=True)
     city = Column(String(100), nullable=True, index=True)
     state = Column(String(100), nullable=True)
     zip_code = Column(String(20), nullable=True)

     property_type = Column(String(50), nullable=True)  # apartment, house, condo, studio
     bedrooms = Column(Integer, default=1, nullable=False)
     bathrooms = Column(Integer, default=1, nullable=False)
     square_feet = Column(Integer, nullable=True)

     # Pricing
     monthly_rent = Column(Numeric(12, 2), nullable=False)
     security_deposit = Column(Numeric(12, 2), nullable=True)

     amenities = Column(Text, nullable=True)  # JSON list
     images = Column(Text, nullable=True)  # JSON list of URLs
     utilities_included = Column(Boolean, default=False, nullable=False)
     pet_friendly = Column(Boolean, default=False, nullable=False)
     parking_available = Column(Boolean, default=False, nullable=False)
     status = Column(String(20), default=PropertyStatus.AVAILABLE.value, nullable=False, index=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     landlord = relationship("User", back_populates="properties")
     leases = relationship("Lease", back_populates="property")
     applications = relationship("Application", back_populates="property", cascade="all, delete-orphan")
     maintenance_requests = relationship("MaintenanceRequest", back_populates="property", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Property(id={self.id}, title='{self.title}', status='{self.status}')>"

     @property
     def amenity_list(self) -> list:
          return json_list(self.amenities)

     @property
     def image_list(self) -> list:
          return json_list(self.images)


def json_list(raw) -> list:
     if not raw:
          return []
     try:
          value = json.loads(raw)
     except ValueError:
          return [item.strip() for item in raw.split(",") if item.strip()]
     return value if isinstance(value, list) else []
