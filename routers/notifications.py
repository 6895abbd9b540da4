# routers/notifications.py
"""
Notification API. Users only ever see their own notifications; anyone
else's count as missing.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from routers.errors import service_errors
from schemas.notification import NotificationListResponse, NotificationResponse, UnreadCountResponse
from services.notification_service import NotificationService, serialize_notification

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
def list_notifications(
     is_read: Optional[bool] = Query(None, description="Only read (true) or unread (false)"),
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     notifications = NotificationService.list_for_user(db, user.id, is_read=is_read)
     return {"data": [serialize_notification(n) for n in notifications]}


@router.get("/unread/count", response_model=UnreadCountResponse)
def unread_count(
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     count = NotificationService.unread_count(db, user.id)
     return {"count": count, "unread_count": count}


# Registered before /{notification_id}/read so "mark-all" is not taken for an id
@router.put("/mark-all-read")
@router.put("/mark-all/read")
def mark_all_read(
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     updated = NotificationService.mark_all_read(db, user.id)
     db.commit()
     return {"updated": updated}


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
     notification_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          notification = NotificationService.set_read(db, user.id, notification_id, True)
     db.commit()
     return serialize_notification(notification)


@router.put("/{notification_id}/unread", response_model=NotificationResponse)
def mark_unread(
     notification_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          notification = NotificationService.set_read(db, user.id, notification_id, False)
     db.commit()
     return serialize_notification(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
     notification_id: int,
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session),
):
     with service_errors():
          NotificationService.delete(db, user.id, notification_id)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)
