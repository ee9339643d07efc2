from extrovertidos.crud.base import CRUDBase
from extrovertidos.models.event import Event

event = CRUDBase(Event)
