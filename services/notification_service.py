# services/notification_service.py
"""
Notification Service - in-app notifications for landlords and tenants.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Notification
from services.errors import NotFoundError

logger = logging.getLogger(__name__)


def serialize_notification(notification: Notification) -> dict:
     return {
          "id": notification.id,
          "user_id": notification.user_id,
          "type": notification.type,
          "title": notification.title,
          "message": notification.message,
          "is_read": bool(notification.is_read),
          "read": bool(notification.is_read),
          "related_id": notification.related_id,
          "related_type": notification.related_type,
          "created_at": notification.created_at,
     }


class NotificationService:
     """Service class for notification logic."""

     @staticmethod
     def notify(
          db: Session,
          user_id: int,
          type: str,
          title: str,
          message: str = "",
          related_id=None,
          related_type: Optional[str] = None,
     ) -> Notification:
          """
          Queue a notification for a user inside the caller's transaction.

          Args:
               db: SQLAlchemy database session
               user_id: Recipient
               type: Event name, e.g. application_approved
               title: Short headline
               message: Body text
               related_id: ID of the record the event is about
               related_type: Kind of that record (application, lease, ...)

          Returns:
               The pending Notification
          """
          notification = Notification(
               user_id=user_id,
               type=type,
               title=title,
               message=message,
               related_id=str(related_id) if related_id is not None else None,
               related_type=related_type,
          )
          db.add(notification)
          logger.debug("Notify user %s: %s", user_id, type)
          return notification

     @staticmethod
     def list_for_user(db: Session, user_id: int, is_read: Optional[bool] = None) -> List[Notification]:
          query = db.query(Notification).filter(Notification.user_id == user_id)
          if is_read is not None:
               query = query.filter(Notification.is_read == is_read)
          return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()

     @staticmethod
     def unread_count(db: Session, user_id: int) -> int:
          return (
               db.query(Notification)
               .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
               .count()
          )

     @staticmethod
     def get_own(db: Session, user_id: int, notification_id: int) -> Notification:
          """Fetch a notification; someone else's counts as missing."""
          notification = (
               db.query(Notification)
               .filter(Notification.id == notification_id, Notification.user_id == user_id)
               .first()
          )
          if not notification:
               raise NotFoundError("Notification not found")
          return notification

     @staticmethod
     def set_read(db: Session, user_id: int, notification_id: int, is_read: bool = True) -> Notification:
          notification = NotificationService.get_own(db, user_id, notification_id)
          notification.is_read = is_read
          db.flush()
          return notification

     @staticmethod
     def mark_all_read(db: Session, user_id: int) -> int:
          updated = (
               db.query(Notification)
               .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
               .update({Notification.is_read: True}, synchronize_session=False)
          )
          db.flush()
          return updated

     @staticmethod
     def delete(db: Session, user_id: int, notification_id: int) -> None:
          notification = NotificationService.get_own(db, user_id, notification_id)
          db.delete(notification)
          db.flush()
