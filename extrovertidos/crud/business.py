from extrovertidos.crud.base import CRUDBase
from extrovertidos.models.business import Business

business = CRUDBase(Business)
