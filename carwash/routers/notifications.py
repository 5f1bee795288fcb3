from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[schemas.NotificationOut])
def list_notifications(
    user_id: Optional[int] = Query(None, alias="userId"),
    unread: bool = Query(False),
    data: DataAccess = Depends(get_data),
):
    notifications = data.collection("notifications")
    if user_id is not None:
        notifications = [n for n in notifications if n.user_id == user_id]
    if unread:
        notifications = [n for n in notifications if not n.read]
    return sorted(notifications, key=lambda n: n.id, reverse=True)


@router.post("", response_model=schemas.NotificationOut, status_code=201)
def create_notification(payload: schemas.NotificationCreate, data: DataAccess = Depends(get_data)):
    return data.create("notifications", payload.model_dump(mode="json"))


# Declared before "/{notification_id}" so the literal path wins.
@router.put("/read-all", response_model=schemas.MessageResponse)
def mark_all_read(payload: schemas.ReadAllRequest, data: DataAccess = Depends(get_data)):
    if payload.user_id is None:
        raise HTTPException(status_code=400, detail="userId is required")

    unread = [
        n for n in data.collection("notifications")
        if n.user_id == payload.user_id and not n.read
    ]
    for notification in unread:
        data.update("notifications", notification.id, {"read": True})
    return {"message": f"{len(unread)} notifications marked as read"}


@router.get("/{notification_id}", response_model=schemas.NotificationOut)
def get_notification(notification_id: int, data: DataAccess = Depends(get_data)):
    return data.get("notifications", notification_id)


@router.put("/{notification_id}/read", response_model=schemas.NotificationOut)
def mark_read(notification_id: int, data: DataAccess = Depends(get_data)):
    return data.update("notifications", notification_id, {"read": True})


@router.put("/{notification_id}", response_model=schemas.NotificationOut)
def update_notification(
    notification_id: int,
    payload: schemas.NotificationCreate,
    data: DataAccess = Depends(get_data),
):
    return data.update("notifications", notification_id, payload.model_dump(mode="json"))


@router.delete("/{notification_id}", response_model=schemas.MessageResponse)
def delete_notification(notification_id: int, data: DataAccess = Depends(get_data)):
    data.delete("notifications", notification_id)
    return {"message": "Notification deleted"}
