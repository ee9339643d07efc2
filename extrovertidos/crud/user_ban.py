from extrovertidos.crud.base import CRUDBase
from extrovertidos.models.user_ban import UserBan

user_ban = CRUDBase(UserBan)
