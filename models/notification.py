# models/notification.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Notification(Base):
     """
     In-app notification for a single user.

     related_type/related_id point at the record that triggered it
     (application, lease, maintenance, payment).
     """
     __tablename__ = "notifications"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     type = Column(String(50), nullable=False)
     title = Column(String(255), nullable=False)
     message = Column(Text, nullable=True)
     is_read = Column(Boolean, default=False, nullable=False, index=True)
     related_id = Column(String(64), nullable=True)
     related_type = Column(String(50), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     user = relationship("User", back_populates="notifications")

     def __repr__(self):
          return f"<Notification(id={self.id}, user_id={self.user_id}, type='{self.type}', read={self.is_read})>"
