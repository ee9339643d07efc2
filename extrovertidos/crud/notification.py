from extrovertidos.crud.base import CRUDBase
from extrovertidos.models.notification import Notification

notification = CRUDBase(Notification)
