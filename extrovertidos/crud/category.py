from extrovertidos.crud.base import CRUDBase
from extrovertidos.models.category import Category

category = CRUDBase(Category)
