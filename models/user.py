# models/user.py
import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class UserRole(str, enum.Enum):
     ADMIN = "admin"
     LANDLORD = "landlord"
     TENANT = "tenant"


class User(Base):
     """
     User model - central authentication table.

     Local accounts carry a bcrypt password hash; Firebase accounts are
     matched on firebase_uid and may have no password at all.
     """
     __tablename__ = "users"
     __hidden_columns__ = ("password",)

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=True)
     firebase_uid = Column(String(128), unique=True, nullable=True, index=True)
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     phone = Column(String(50), nullable=True)
     role = Column(String(20), nullable=False, default=UserRole.TENANT.value)  # admin, landlord, tenant
     admin_id = Column(String(64), nullable=True)
     avatar = Column(String(500), nullable=True)
     is_active = Column(Boolean, default=True, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     properties = relationship("Property", back_populates="landlord")
     notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

     @property
     def full_name(self) -> str:
          return f"{self.first_name} {self.last_name}".strip()
