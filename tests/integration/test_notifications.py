import pytest

from extrovertidos.core.constants import NotificationTypeEnum
from extrovertidos.core.exceptions import NotFoundError
from extrovertidos.services.notification import NotificationService


@pytest.mark.asyncio
async def test_notification_lifecycle(backend, profile_factory):
    user = profile_factory()
    other = profile_factory()
    notifications = NotificationService(backend)

    welcome = await notifications.create_welcome_notification(user.id)
    info = await notifications.create_notification(
        user_id=user.id, type=NotificationTypeEnum.INFO, title="Aviso", message="Mantención programada"
    )
    await notifications.create_notification(user_id=other.id, type="info", title="Otro", message="No es tuyo")

    assert welcome.type == "welcome"
    assert await notifications.get_unread_count(user.id) == 2

    read = await notifications.mark_as_read(info.id, user.id)
    assert read.read is True
    assert await notifications.get_unread_count(user.id) == 1

    with pytest.raises(NotFoundError):
        await notifications.mark_as_read(info.id, other.id)

    assert await notifications.mark_all_as_read(user.id) == 1
    assert await notifications.get_unread_count(user.id) == 0
    assert await notifications.get_unread_count(other.id) == 1

    await notifications.delete_notification(welcome.id, user.id)
    remaining = await notifications.get_user_notifications(user.id)
    assert [n.id for n in remaining] == [info.id]

    with pytest.raises(NotFoundError):
        await notifications.delete_notification(welcome.id, user.id)


@pytest.mark.asyncio
async def test_notify_swallows_failures(backend):
    notifications = NotificationService(backend)

    # title is required
    result = await notifications.notify(user_id="U1", type="info", title=None, message="x")

    assert result is None
