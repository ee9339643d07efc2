import asyncio
import logging
from datetime import datetime
from typing import List

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.constants import MIN_BAN_REASON_LENGTH, NotificationTypeEnum, RoleEnum, TableEnum
from extrovertidos.core.exceptions import BackendError, BadRequestError, ConflictError, NotFoundError
from extrovertidos.schemas.ban import BanInfo, BanStatus, UserBan
from extrovertidos.schemas.profile import ProfileWithBanStatus
from extrovertidos.services.notification import NotificationService
from extrovertidos.services.role import PROFILE_SUMMARY_COLUMNS, RoleService

logger = logging.getLogger(__name__)

class BanService:
    def __init__(self, backend: BackendClient, roles: RoleService, notifications: NotificationService):
        self.backend = backend
        self.roles = roles
        self.notifications = notifications

    async def check_ban_status(self, user_id: str) -> BanStatus:
        if not user_id:
            return BanStatus()

        result = await self.backend.select(TableEnum.USER_BANS, {"user_id": user_id, "is_active": True}, limit=1)
        if result.error:
            logger.error(f"Failed to check ban status for user {user_id}: {result.error}")
            return BanStatus()
        if not result.data:
            return BanStatus()

        ban = result.data[0]
        return BanStatus(is_banned=True, reason=ban["ban_reason"], banned_at=ban["banned_at"], ban_id=ban["id"])

    async def ban_user(self, user_id: str, actor_id: str, reason: str) -> UserBan:
        await self.roles.require_moderator(actor_id, "You do not have permission to ban users.")

        if not user_id or not reason:
            raise BadRequestError("user_id and reason are required.")
        if len(reason.strip()) < MIN_BAN_REASON_LENGTH:
            raise BadRequestError(f"The ban reason must be at least {MIN_BAN_REASON_LENGTH} characters long.")
        if user_id == actor_id:
            raise BadRequestError("You cannot ban yourself.")

        target = await self.backend.get(TableEnum.PROFILES, user_id, columns=["role"])
        if target.error:
            raise BackendError("Could not load the user to ban.", cause=target.error)
        if target.data is None:
            raise NotFoundError("User not found.")
        if target.data["role"] == RoleEnum.ADMIN.value:
            raise BadRequestError("Administrators cannot be banned.")

        status = await self.check_ban_status(user_id)
        if status.is_banned:
            raise ConflictError("User is already banned.")

        result = await self.backend.insert(TableEnum.USER_BANS, {
            "user_id": user_id,
            "banned_by": actor_id,
            "ban_reason": reason,
            "is_active": True,
        })
        if result.error:
            raise BackendError("Could not ban user.", cause=result.error)
        logger.info(f"User {user_id} banned by {actor_id}")

        await self.notifications.notify(
            user_id=user_id,
            type=NotificationTypeEnum.ACCOUNT_BANNED,
            title="Cuenta suspendida",
            message=f"Tu cuenta ha sido suspendida. Motivo: {reason}",
        )
        return UserBan.model_validate(result.data)

    async def unban_user(self, ban_id: str, actor_id: str) -> UserBan:
        await self.roles.require_moderator(actor_id, "You do not have permission to unban users.")
        if not ban_id:
            raise BadRequestError("ban_id is required.")

        result = await self.backend.update(TableEnum.USER_BANS, ban_id, {
            "is_active": False,
            "unbanned_by": actor_id,
            "unbanned_at": datetime.utcnow(),
        })
        if result.error:
            raise BackendError("Could not unban user.", cause=result.error)
        if result.data is None:
            raise NotFoundError("Ban not found.")
        logger.info(f"Ban {ban_id} lifted by {actor_id}")

        await self.notifications.notify(
            user_id=result.data["user_id"],
            type=NotificationTypeEnum.ACCOUNT_UNBANNED,
            title="Cuenta restaurada",
            message="Tu cuenta ha sido restaurada. Ya puedes volver a utilizar la plataforma.",
        )
        return UserBan.model_validate(result.data)

    async def get_user_ban_history(self, user_id: str, actor_id: str) -> List[UserBan]:
        await self.roles.require_moderator(actor_id, "You do not have permission to view ban history.")
        result = await self.backend.select(
            TableEnum.USER_BANS, {"user_id": user_id}, order_by="banned_at", descending=True
        )
        if result.error:
            raise BackendError("Could not load ban history.", cause=result.error)
        return [UserBan.model_validate(row) for row in result.data]

    async def get_all_users_with_ban_status(self, actor_id: str, page: int = 1, limit: int = 50) -> List[ProfileWithBanStatus]:
        await self.roles.require_moderator(actor_id, "You do not have permission to list users.")
        if page < 1 or limit < 1:
            raise BadRequestError("page and limit must be positive.")

        users, bans = await asyncio.gather(
            self.backend.select(
                TableEnum.PROFILES, columns=PROFILE_SUMMARY_COLUMNS,
                order_by="created_at", descending=True, offset=(page - 1) * limit, limit=limit,
            ),
            self.backend.select(
                TableEnum.USER_BANS, {"is_active": True}, columns=["id", "user_id", "ban_reason", "banned_at"]
            ),
        )
        if users.error:
            raise BackendError("Could not load users.", cause=users.error)
        if bans.error:
            raise BackendError("Could not load bans.", cause=bans.error)

        bans_by_user = {ban["user_id"]: ban for ban in bans.data}
        return [
            ProfileWithBanStatus(
                **user,
                is_banned=user["id"] in bans_by_user,
                ban_info=BanInfo.model_validate(bans_by_user[user["id"]]) if user["id"] in bans_by_user else None,
            )
            for user in users.data
        ]
