import logging
from typing import List, Optional

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.constants import NotificationTypeEnum, TableEnum
from extrovertidos.core.exceptions import BackendError, NotFoundError
from extrovertidos.schemas.notification import Notification, NotificationCreate

logger = logging.getLogger(__name__)

class NotificationService:
    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def create_notification(
        self,
        *,
        user_id: str,
        type: str,
        title: str,
        message: str,
        related_event_id: Optional[str] = None,
        related_business_id: Optional[str] = None,
    ) -> Notification:
        notification_in = NotificationCreate(
            user_id=user_id, type=getattr(type, "value", type), title=title, message=message,
            related_event_id=related_event_id, related_business_id=related_business_id,
        )
        result = await self.backend.insert(TableEnum.NOTIFICATIONS, {**notification_in.model_dump(), "read": False})
        if result.error:
            raise BackendError("Could not create notification.", cause=result.error)
        return Notification.model_validate(result.data)

    async def notify(self, **kwargs) -> Optional[Notification]:
        """Best-effort ``create_notification``: failures are logged, never raised."""
        try:
            return await self.create_notification(**kwargs)
        except Exception as e:
            logger.warning(f"Could not create {kwargs.get('type')} notification for user {kwargs.get('user_id')}: {e}")
            return None

    async def get_user_notifications(self, user_id: str, limit: int = 50) -> List[Notification]:
        result = await self.backend.select(
            TableEnum.NOTIFICATIONS, {"user_id": user_id}, order_by="created_at", descending=True, limit=limit
        )
        if result.error:
            raise BackendError("Could not load notifications.", cause=result.error)
        return [Notification.model_validate(row) for row in result.data]

    async def get_unread_count(self, user_id: str) -> int:
        result = await self.backend.count(TableEnum.NOTIFICATIONS, {"user_id": user_id, "read": False})
        if result.error:
            raise BackendError("Could not count notifications.", cause=result.error)
        return result.count or 0

    async def mark_as_read(self, notification_id: str, user_id: str) -> Notification:
        result = await self.backend.update_where(
            TableEnum.NOTIFICATIONS, {"id": notification_id, "user_id": user_id}, {"read": True}
        )
        if result.error:
            raise BackendError("Could not update notification.", cause=result.error)
        if not result.data:
            raise NotFoundError("Notification not found or not authorized")
        return Notification.model_validate(result.data[0])

    async def mark_all_as_read(self, user_id: str) -> int:
        result = await self.backend.update_where(
            TableEnum.NOTIFICATIONS, {"user_id": user_id, "read": False}, {"read": True}
        )
        if result.error:
            raise BackendError("Could not update notifications.", cause=result.error)
        return result.count or 0

    async def delete_notification(self, notification_id: str, user_id: str) -> None:
        result = await self.backend.delete(TableEnum.NOTIFICATIONS, {"id": notification_id, "user_id": user_id})
        if result.error:
            raise BackendError("Could not delete notification.", cause=result.error)
        if not result.count:
            raise NotFoundError("Notification not found or not authorized")

    async def create_welcome_notification(self, user_id: str) -> Notification:
        return await self.create_notification(
            user_id=user_id,
            type=NotificationTypeEnum.WELCOME,
            title="¡Bienvenido a Extrovertidos!",
            message="Gracias por unirte a nuestra comunidad. Explora y publica tus eventos favoritos.",
        )
