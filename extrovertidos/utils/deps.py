from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.cache import TTLCache
from extrovertidos.services.admin_stats import AdminStatsService
from extrovertidos.services.ban import BanService
from extrovertidos.services.cache_service import CacheService
from extrovertidos.services.category import CategoryService
from extrovertidos.services.chart import ChartService
from extrovertidos.services.moderation import ModerationService
from extrovertidos.services.notification import NotificationService
from extrovertidos.services.role import RoleService

def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache

def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend

def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Identity resolved upstream by the auth provider."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Id header")
    return x_user_id

def get_role_service(backend: BackendClient = Depends(get_backend)) -> RoleService:
    return RoleService(backend)

def get_notification_service(backend: BackendClient = Depends(get_backend)) -> NotificationService:
    return NotificationService(backend)

def get_admin_stats_service(
    backend: BackendClient = Depends(get_backend),
    cache: TTLCache = Depends(get_cache),
    roles: RoleService = Depends(get_role_service),
) -> AdminStatsService:
    return AdminStatsService(backend, cache, roles)

def get_moderation_service(
    backend: BackendClient = Depends(get_backend),
    cache: TTLCache = Depends(get_cache),
    roles: RoleService = Depends(get_role_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> ModerationService:
    return ModerationService(backend, cache, roles, notifications)

def get_ban_service(
    backend: BackendClient = Depends(get_backend),
    roles: RoleService = Depends(get_role_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> BanService:
    return BanService(backend, roles, notifications)

def get_chart_service(
    backend: BackendClient = Depends(get_backend),
    cache: TTLCache = Depends(get_cache),
    roles: RoleService = Depends(get_role_service),
) -> ChartService:
    return ChartService(backend, cache, roles)

def get_category_service(
    backend: BackendClient = Depends(get_backend),
    cache: TTLCache = Depends(get_cache),
    roles: RoleService = Depends(get_role_service),
) -> CategoryService:
    return CategoryService(backend, cache, roles)

def get_cache_service(
    cache: TTLCache = Depends(get_cache),
    roles: RoleService = Depends(get_role_service),
) -> CacheService:
    return CacheService(cache, roles)
