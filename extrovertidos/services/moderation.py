import logging
from datetime import datetime
from typing import Any, Dict, List

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.cache import TTLCache
from extrovertidos.core.cache_config import INVALIDATION_PATTERNS
from extrovertidos.core.constants import NotificationTypeEnum, PublicationStatusEnum, TableEnum
from extrovertidos.core.exceptions import BackendError, ConflictError, NotFoundError
from extrovertidos.schemas.publication import Business, Event
from extrovertidos.services.notification import NotificationService
from extrovertidos.services.role import RoleService

logger = logging.getLogger(__name__)

PENDING_LIMIT = 50

class ModerationService:
    """Approve / reject events and businesses.

    Every transition leaves ``pending`` and runs: authorization, state write,
    stats invalidation, then a best-effort notification to the owner. A
    failed authorization or write stops the sequence.
    """

    def __init__(self, backend: BackendClient, cache: TTLCache, roles: RoleService, notifications: NotificationService):
        self.backend = backend
        self.cache = cache
        self.roles = roles
        self.notifications = notifications

    def _invalidate_stats(self) -> None:
        for namespace in INVALIDATION_PATTERNS["publication_moderated"]:
            self.cache.invalidate_namespace(namespace)

    async def _load_pending(self, table: TableEnum, item_id: str, label: str) -> Dict[str, Any]:
        result = await self.backend.get(table, item_id)
        if result.error:
            raise BackendError(f"Could not load {label}.", cause=result.error)
        if result.data is None:
            raise NotFoundError(f"{label.capitalize()} not found.")
        if result.data["status"] != PublicationStatusEnum.PENDING.value:
            raise ConflictError(f"Only pending publications can be moderated; this {label} is {result.data['status']}.")
        return result.data

    async def _write_status(self, table: TableEnum, item_id: str, values: Dict[str, Any], label: str) -> Dict[str, Any]:
        result = await self.backend.update_if(
            table, item_id, {"status": PublicationStatusEnum.PENDING.value}, values
        )
        if result.error:
            raise BackendError(f"Could not update {label}.", cause=result.error)
        if not result.count:
            raise ConflictError(f"This {label} was moderated by someone else in the meantime.")
        return result.data

    async def _list(self, table: TableEnum, actor_id: str, *, pending_only: bool, label: str) -> List[Dict[str, Any]]:
        await self.roles.require_moderator(actor_id, f"You do not have permission to view {label}.")
        if pending_only:
            result = await self.backend.select(
                table, {"status": PublicationStatusEnum.PENDING.value},
                order_by="created_at", limit=PENDING_LIMIT,
            )
        else:
            result = await self.backend.select(table, order_by="created_at", descending=True)
        if result.error:
            raise BackendError(f"Could not load {label}.", cause=result.error)
        return result.data

    async def get_pending_events(self, actor_id: str) -> List[Event]:
        rows = await self._list(TableEnum.EVENTS, actor_id, pending_only=True, label="pending events")
        return [Event.model_validate(row) for row in rows]

    async def get_all_events(self, actor_id: str) -> List[Event]:
        rows = await self._list(TableEnum.EVENTS, actor_id, pending_only=False, label="events")
        return [Event.model_validate(row) for row in rows]

    async def get_pending_businesses(self, actor_id: str) -> List[Business]:
        rows = await self._list(TableEnum.BUSINESSES, actor_id, pending_only=True, label="pending businesses")
        return [Business.model_validate(row) for row in rows]

    async def get_all_businesses(self, actor_id: str) -> List[Business]:
        rows = await self._list(TableEnum.BUSINESSES, actor_id, pending_only=False, label="businesses")
        return [Business.model_validate(row) for row in rows]

    async def approve_event(self, event_id: str, actor_id: str) -> Event:
        await self.roles.require_moderator(actor_id, "You do not have permission to approve publications.")
        event = await self._load_pending(TableEnum.EVENTS, event_id, "event")

        now = datetime.utcnow()
        updated = await self._write_status(TableEnum.EVENTS, event_id, {
            "status": PublicationStatusEnum.PUBLISHED.value,
            "published_at": now,
            "updated_at": now,
        }, "event")
        self._invalidate_stats()
        logger.info(f"Event {event_id} approved by {actor_id}")

        await self.notifications.notify(
            user_id=event["user_id"],
            type=NotificationTypeEnum.PUBLICATION_APPROVED,
            title="¡Publicación aprobada!",
            message=f'Tu evento "{event["title"]}" ha sido aprobado y ya está visible para todos.',
            related_event_id=event_id,
        )
        return Event.model_validate(updated)

    async def reject_event(self, event_id: str, actor_id: str, reason: str = "") -> Event:
        await self.roles.require_moderator(actor_id, "You do not have permission to reject publications.")
        event = await self._load_pending(TableEnum.EVENTS, event_id, "event")

        updated = await self._write_status(TableEnum.EVENTS, event_id, {
            "status": PublicationStatusEnum.REJECTED.value,
            "rejection_reason": reason,
            "updated_at": datetime.utcnow(),
        }, "event")
        self._invalidate_stats()
        logger.info(f"Event {event_id} rejected by {actor_id}")

        reason_text = f" Motivo: {reason}" if reason else ""
        await self.notifications.notify(
            user_id=event["user_id"],
            type=NotificationTypeEnum.PUBLICATION_REJECTED,
            title="Publicación rechazada",
            message=f'Tu evento "{event["title"]}" no ha sido aprobado.{reason_text}',
            related_event_id=event_id,
        )
        return Event.model_validate(updated)

    async def approve_business(self, business_id: str, actor_id: str) -> Business:
        await self.roles.require_moderator(actor_id, "You do not have permission to approve businesses.")
        business = await self._load_pending(TableEnum.BUSINESSES, business_id, "business")

        now = datetime.utcnow()
        updated = await self._write_status(TableEnum.BUSINESSES, business_id, {
            "status": PublicationStatusEnum.PUBLISHED.value,
            "approved_by": actor_id,
            "approved_at": now,
            "updated_at": now,
        }, "business")
        self._invalidate_stats()
        logger.info(f"Business {business_id} approved by {actor_id}")

        await self.notifications.notify(
            user_id=business["user_id"],
            type=NotificationTypeEnum.PUBLICATION_APPROVED,
            title="¡Negocio aprobado!",
            message=f'Tu negocio "{business["name"]}" ha sido aprobado y ya está visible para todos.',
            related_business_id=business_id,
        )
        return Business.model_validate(updated)

    async def reject_business(self, business_id: str, actor_id: str, reason: str = "") -> Business:
        await self.roles.require_moderator(actor_id, "You do not have permission to reject businesses.")
        business = await self._load_pending(TableEnum.BUSINESSES, business_id, "business")

        now = datetime.utcnow()
        updated = await self._write_status(TableEnum.BUSINESSES, business_id, {
            "status": PublicationStatusEnum.REJECTED.value,
            "rejected_by": actor_id,
            "rejected_at": now,
            "rejection_reason": reason,
            "updated_at": now,
        }, "business")
        self._invalidate_stats()
        logger.info(f"Business {business_id} rejected by {actor_id}")

        reason_text = f" Motivo: {reason}" if reason else ""
        await self.notifications.notify(
            user_id=business["user_id"],
            type=NotificationTypeEnum.PUBLICATION_REJECTED,
            title="Negocio rechazado",
            message=f'Tu negocio "{business["name"]}" no ha sido aprobado.{reason_text}',
            related_business_id=business_id,
        )
        return Business.model_validate(updated)
