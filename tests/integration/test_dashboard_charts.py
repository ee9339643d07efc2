from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from extrovertidos.core.backend import QueryResult
from extrovertidos.core.constants import DAY_LABELS
from extrovertidos.core.exceptions import AuthorizationError
from extrovertidos.services.chart import ChartService
from extrovertidos.services.role import RoleService


@pytest.mark.asyncio
async def test_events_per_day_buckets_last_seven_days(backend, cache, admin, profile_factory, event_factory):
    owner = profile_factory()
    now = datetime.utcnow()
    event_factory(owner, created_at=now)
    event_factory(owner, created_at=now)
    event_factory(owner, created_at=now - timedelta(days=2))
    event_factory(owner, created_at=now - timedelta(days=10))
    charts = ChartService(backend, cache, RoleService(backend))

    series = await charts.get_events_per_day(admin.id)

    assert len(series) == 7
    assert series[-1].date == now.date().isoformat()
    assert series[-1].day == DAY_LABELS[now.date().weekday()]
    assert series[-1].count == 2
    assert series[-3].count == 1
    assert sum(point.count for point in series) == 3


@pytest.mark.asyncio
async def test_chart_is_cached_in_chart_namespace(backend, cache, clock, admin):
    charts = ChartService(backend, cache, RoleService(backend))

    with patch.object(backend, "select", wraps=backend.select) as select_spy:
        await charts.get_users_per_day(admin.id)
        await charts.get_users_per_day(admin.id)
        assert select_spy.call_count == 1

        clock.advance(60)
        await charts.get_users_per_day(admin.id)
        assert select_spy.call_count == 2


@pytest.mark.asyncio
async def test_chart_failure_returns_empty_series(backend, cache, admin):
    charts = ChartService(backend, cache, RoleService(backend))

    with patch.object(backend, "select", return_value=QueryResult(error=RuntimeError("down"))):
        assert await charts.get_events_per_day(admin.id) == []
    assert cache.get("chartData_events") is None


@pytest.mark.asyncio
async def test_chart_requires_moderation_rights(backend, cache, regular_user):
    charts = ChartService(backend, cache, RoleService(backend))

    with pytest.raises(AuthorizationError):
        await charts.get_events_per_day(regular_user.id)


@pytest.mark.asyncio
async def test_cached_chart_is_handed_out_as_copies(backend, cache, admin):
    charts = ChartService(backend, cache, RoleService(backend))

    series = await charts.get_users_per_day(admin.id)
    series[-1].count = 500

    assert (await charts.get_users_per_day(admin.id))[-1].count == 1
