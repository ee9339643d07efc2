from fastapi import APIRouter, Depends
from typing import List

from extrovertidos.schemas.notification import Notification
from extrovertidos.schemas.response import APIResponse
from extrovertidos.services.notification import NotificationService
from extrovertidos.utils import deps

router = APIRouter()

@router.get("/", response_model=APIResponse[List[Notification]])
async def get_my_notifications(
    user_id: str = Depends(deps.get_current_user_id),
    notifications: NotificationService = Depends(deps.get_notification_service),
):
    """Retrieve the latest notifications for the current user."""
    data = await notifications.get_user_notifications(user_id)
    return APIResponse(message="Notifications fetched successfully", data=data)

@router.get("/unread_count", response_model=APIResponse[int])
async def get_unread_notifications_count(
    user_id: str = Depends(deps.get_current_user_id),
    notifications: NotificationService = Depends(deps.get_notification_service),
):
    """Get the count of unread notifications for the current user."""
    count = await notifications.get_unread_count(user_id)
    return APIResponse(message="Unread notifications count fetched successfully", data=count)

@router.post("/mark_all_read", response_model=APIResponse[int])
async def mark_all_notifications_as_read(
    user_id: str = Depends(deps.get_current_user_id),
    notifications: NotificationService = Depends(deps.get_notification_service),
):
    """Mark all unread notifications for the current user as read."""
    updated = await notifications.mark_all_as_read(user_id)
    return APIResponse(message="All notifications marked as read", data=updated)

@router.post("/{notification_id}/read", response_model=APIResponse[Notification])
async def mark_notification_as_read(
    notification_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    notifications: NotificationService = Depends(deps.get_notification_service),
):
    """Mark a specific notification as read."""
    notification = await notifications.mark_as_read(notification_id, user_id)
    return APIResponse(message="Notification marked as read", data=notification)

@router.delete("/{notification_id}", response_model=APIResponse[None])
async def delete_notification(
    notification_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    notifications: NotificationService = Depends(deps.get_notification_service),
):
    await notifications.delete_notification(notification_id, user_id)
    return APIResponse(message="Notification deleted")
