import logging
from datetime import datetime
from typing import List, Optional

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.constants import MODERATION_ROLES, RoleEnum, TableEnum
from extrovertidos.core.exceptions import AuthorizationError, BackendError, BadRequestError, NotFoundError
from extrovertidos.schemas.profile import ProfileSummary

logger = logging.getLogger(__name__)

PROFILE_SUMMARY_COLUMNS = ["id", "name", "email", "avatar_url", "role", "created_at"]

class RoleService:
    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get_user_role(self, user_id: Optional[str]) -> RoleEnum:
        """Role of ``user_id``; unknown users and lookup failures count as plain users."""
        if not user_id:
            return RoleEnum.USER

        result = await self.backend.get(TableEnum.PROFILES, user_id, columns=["role"])
        if result.error:
            logger.error(f"Failed to load role for user {user_id}: {result.error}")
            return RoleEnum.USER
        if not result.data:
            return RoleEnum.USER
        try:
            return RoleEnum(result.data["role"])
        except ValueError:
            logger.warning(f"User {user_id} has unknown role {result.data['role']!r}")
            return RoleEnum.USER

    async def is_admin(self, user_id: Optional[str]) -> bool:
        return await self.get_user_role(user_id) == RoleEnum.ADMIN

    async def is_moderator(self, user_id: Optional[str]) -> bool:
        return await self.get_user_role(user_id) in MODERATION_ROLES

    async def require_admin(self, user_id: Optional[str], detail: str = "Only administrators can perform this action.") -> None:
        if not await self.is_admin(user_id):
            raise AuthorizationError(detail)

    async def require_moderator(self, user_id: Optional[str], detail: str = "You do not have moderation permissions.") -> None:
        if not await self.is_moderator(user_id):
            raise AuthorizationError(detail)

    async def update_user_role(self, target_user_id: str, new_role: str, actor_id: str) -> ProfileSummary:
        await self.require_admin(actor_id, "You do not have permission to change roles.")
        try:
            role = RoleEnum(new_role)
        except ValueError:
            raise BadRequestError(f"Unknown role: {new_role}")

        result = await self.backend.update(
            TableEnum.PROFILES, target_user_id, {"role": role.value, "updated_at": datetime.utcnow()}
        )
        if result.error:
            raise BackendError("Could not update the user role.", cause=result.error)
        if result.data is None:
            raise NotFoundError("User not found.")

        logger.info(f"User {actor_id} changed role of {target_user_id} to {role.value}")
        return ProfileSummary.model_validate(result.data)

    async def get_all_users(self, actor_id: str, limit: int = 100) -> List[ProfileSummary]:
        await self.require_admin(actor_id, "You do not have permission to list users.")
        result = await self.backend.select(
            TableEnum.PROFILES, columns=PROFILE_SUMMARY_COLUMNS,
            order_by="created_at", descending=True, limit=limit,
        )
        if result.error:
            raise BackendError("Could not load users.", cause=result.error)
        return [ProfileSummary.model_validate(row) for row in result.data]
