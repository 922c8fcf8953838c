"""
Catalog Services
One service per resource, each bound to the request's database session.
"""

from wacdo.services.catalog.accounts import RoleService, UserService
from wacdo.services.catalog.base import CrudService
from wacdo.services.catalog.menus import MenuProductService, MenuService
from wacdo.services.catalog.options import OptionService, OptionValueService
from wacdo.services.catalog.products import CategoryService, ProductService

__all__ = [
    "CrudService",
    "RoleService",
    "UserService",
    "CategoryService",
    "ProductService",
    "OptionService",
    "OptionValueService",
    "MenuService",
    "MenuProductService",
]
