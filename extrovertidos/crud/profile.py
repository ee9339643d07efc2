from extrovertidos.crud.base import CRUDBase
from extrovertidos.models.profile import Profile

profile = CRUDBase(Profile)
