from fastapi import APIRouter, Depends
from typing import Any, Dict

from extrovertidos.schemas.response import APIResponse
from extrovertidos.services.cache_service import CacheService
from extrovertidos.utils import deps

router = APIRouter()

@router.get("/stats", response_model=APIResponse[Dict[str, Any]])
async def get_cache_stats(
    user_id: str = Depends(deps.get_current_user_id),
    cache_service: CacheService = Depends(deps.get_cache_service),
):
    stats = await cache_service.get_cache_stats(user_id)
    return APIResponse(message="Cache statistics retrieved successfully", data=stats)

@router.get("/health", response_model=APIResponse[Dict[str, bool]])
async def cache_health(cache_service: CacheService = Depends(deps.get_cache_service)):
    return APIResponse(message="Cache health checked", data={"healthy": cache_service.health_check()})

@router.post("/purge", response_model=APIResponse[Dict[str, int]])
async def purge_expired_cache(
    user_id: str = Depends(deps.get_current_user_id),
    cache_service: CacheService = Depends(deps.get_cache_service),
):
    purged = await cache_service.purge_expired(user_id)
    return APIResponse(message="Expired cache entries purged", data={"purged": purged})

@router.delete("/{namespace}", response_model=APIResponse[Dict[str, int]])
async def invalidate_cache_namespace(
    namespace: str,
    user_id: str = Depends(deps.get_current_user_id),
    cache_service: CacheService = Depends(deps.get_cache_service),
):
    removed = await cache_service.invalidate_namespace(namespace, user_id)
    return APIResponse(message=f"Cache namespace {namespace} invalidated", data={"removed": removed})

@router.delete("", response_model=APIResponse[None])
async def clear_cache(
    user_id: str = Depends(deps.get_current_user_id),
    cache_service: CacheService = Depends(deps.get_cache_service),
):
    await cache_service.clear(user_id)
    return APIResponse(message="Cache cleared")
