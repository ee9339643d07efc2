from typing import List

from fastapi import APIRouter, Depends, Query

from extrovertidos.schemas.ban import BanCreate, UserBan
from extrovertidos.schemas.profile import ProfileSummary, ProfileWithBanStatus, RoleUpdate
from extrovertidos.schemas.publication import Business, Event, RejectionRequest
from extrovertidos.schemas.response import APIResponse
from extrovertidos.schemas.stats import AdminStats, DailyCount
from extrovertidos.services.admin_stats import AdminStatsService
from extrovertidos.services.ban import BanService
from extrovertidos.services.chart import ChartService
from extrovertidos.services.moderation import ModerationService
from extrovertidos.services.role import RoleService
from extrovertidos.utils import deps

router = APIRouter()

@router.get("/stats", response_model=APIResponse[AdminStats])
async def get_admin_stats(
    user_id: str = Depends(deps.get_current_user_id),
    stats_service: AdminStatsService = Depends(deps.get_admin_stats_service),
):
    stats = await stats_service.get_admin_stats(user_id)
    return APIResponse(message="Stats retrieved successfully", data=stats)

@router.get("/charts/events-per-day", response_model=APIResponse[List[DailyCount]])
async def get_events_per_day(
    user_id: str = Depends(deps.get_current_user_id),
    chart_service: ChartService = Depends(deps.get_chart_service),
):
    data = await chart_service.get_events_per_day(user_id)
    return APIResponse(message="Events per day retrieved successfully", data=data)

@router.get("/charts/users-per-day", response_model=APIResponse[List[DailyCount]])
async def get_users_per_day(
    user_id: str = Depends(deps.get_current_user_id),
    chart_service: ChartService = Depends(deps.get_chart_service),
):
    data = await chart_service.get_users_per_day(user_id)
    return APIResponse(message="Users per day retrieved successfully", data=data)

@router.get("/events/pending", response_model=APIResponse[List[Event]])
async def get_pending_events(
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    data = await moderation.get_pending_events(user_id)
    return APIResponse(message="Pending events retrieved successfully", data=data)

@router.get("/events", response_model=APIResponse[List[Event]])
async def get_all_events(
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    data = await moderation.get_all_events(user_id)
    return APIResponse(message="Events retrieved successfully", data=data)

@router.post("/events/{event_id}/approve", response_model=APIResponse[Event])
async def approve_event(
    event_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    event = await moderation.approve_event(event_id, user_id)
    return APIResponse(message="Event approved successfully", data=event)

@router.post("/events/{event_id}/reject", response_model=APIResponse[Event])
async def reject_event(
    event_id: str,
    rejection: RejectionRequest,
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    event = await moderation.reject_event(event_id, user_id, rejection.reason)
    return APIResponse(message="Event rejected successfully", data=event)

@router.get("/businesses/pending", response_model=APIResponse[List[Business]])
async def get_pending_businesses(
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    data = await moderation.get_pending_businesses(user_id)
    return APIResponse(message="Pending businesses retrieved successfully", data=data)

@router.get("/businesses", response_model=APIResponse[List[Business]])
async def get_all_businesses(
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    data = await moderation.get_all_businesses(user_id)
    return APIResponse(message="Businesses retrieved successfully", data=data)

@router.post("/businesses/{business_id}/approve", response_model=APIResponse[Business])
async def approve_business(
    business_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    business = await moderation.approve_business(business_id, user_id)
    return APIResponse(message="Business approved successfully", data=business)

@router.post("/businesses/{business_id}/reject", response_model=APIResponse[Business])
async def reject_business(
    business_id: str,
    rejection: RejectionRequest,
    user_id: str = Depends(deps.get_current_user_id),
    moderation: ModerationService = Depends(deps.get_moderation_service),
):
    business = await moderation.reject_business(business_id, user_id, rejection.reason)
    return APIResponse(message="Business rejected successfully", data=business)

@router.get("/users", response_model=APIResponse[List[ProfileSummary]])
async def get_all_users(
    user_id: str = Depends(deps.get_current_user_id),
    roles: RoleService = Depends(deps.get_role_service),
):
    data = await roles.get_all_users(user_id)
    return APIResponse(message="Users retrieved successfully", data=data)

@router.get("/users/ban-status", response_model=APIResponse[List[ProfileWithBanStatus]])
async def get_users_with_ban_status(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    user_id: str = Depends(deps.get_current_user_id),
    bans: BanService = Depends(deps.get_ban_service),
):
    data = await bans.get_all_users_with_ban_status(user_id, page=page, limit=limit)
    return APIResponse(message="Users retrieved successfully", data=data)

@router.put("/users/{target_user_id}/role", response_model=APIResponse[ProfileSummary])
async def update_user_role(
    target_user_id: str,
    role_update: RoleUpdate,
    user_id: str = Depends(deps.get_current_user_id),
    roles: RoleService = Depends(deps.get_role_service),
):
    profile = await roles.update_user_role(target_user_id, role_update.role, user_id)
    return APIResponse(message="Role updated successfully", data=profile)

@router.post("/users/{target_user_id}/ban", response_model=APIResponse[UserBan])
async def ban_user(
    target_user_id: str,
    ban_in: BanCreate,
    user_id: str = Depends(deps.get_current_user_id),
    bans: BanService = Depends(deps.get_ban_service),
):
    ban = await bans.ban_user(target_user_id, user_id, ban_in.reason)
    return APIResponse(message="User banned successfully", data=ban)

@router.get("/users/{target_user_id}/bans", response_model=APIResponse[List[UserBan]])
async def get_user_ban_history(
    target_user_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    bans: BanService = Depends(deps.get_ban_service),
):
    data = await bans.get_user_ban_history(target_user_id, user_id)
    return APIResponse(message="Ban history retrieved successfully", data=data)

@router.post("/bans/{ban_id}/unban", response_model=APIResponse[UserBan])
async def unban_user(
    ban_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    bans: BanService = Depends(deps.get_ban_service),
):
    ban = await bans.unban_user(ban_id, user_id)
    return APIResponse(message="User unbanned successfully", data=ban)
