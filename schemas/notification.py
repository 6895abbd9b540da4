# schemas/notification.py
from datetime import datetime
from typing import List, Optional

from .base import CamelModel


class NotificationResponse(CamelModel):
     id: int
     user_id: int
     type: str
     title: str
     message: Optional[str] = None
     is_read: bool = False
     read: bool = False
     related_id: Optional[str] = None
     related_type: Optional[str] = None
     created_at: Optional[datetime] = None


class NotificationListResponse(CamelModel):
     data: List[NotificationResponse]


class UnreadCountResponse(CamelModel):
     count: int
     unread_count: int
