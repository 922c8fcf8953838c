"""Menu and menu entry services."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from wacdo.core.exceptions import ConflictError
from wacdo.models import Menu, MenuProduct, Product
from wacdo.schemas import MenuCreate, MenuProductCreate, MenuUpdate
from wacdo.services.catalog.base import CrudService, changes_from

logger = logging.getLogger(__name__)


class MenuService(CrudService[Menu]):
    model = Menu
    entity_name = "Menu"
    load_options = (selectinload(Menu.menu_products),)

    async def create(self, data: MenuCreate) -> Menu:
        if await self.exists(Menu.name == data.name):
            raise ConflictError("Menu already exists")

        menu = await self.save(Menu(**data.model_dump()), "Menu already exists")
        logger.info(f"Menu #{menu.id} '{menu.name}' created")
        return menu

    async def update(self, menu_id: int, data: MenuUpdate) -> Menu:
        menu = await self.get_or_404(menu_id)
        changes = changes_from(data)

        if "name" in changes and await self.exists(
            Menu.name == changes["name"], Menu.id != menu_id
        ):
            raise ConflictError("Menu name already exists")

        return await self.save(self.apply(menu, changes), "Menu name already exists")

    async def toggle_availability(self, menu_id: int) -> Menu:
        menu = await self.get_or_404(menu_id)
        menu.is_available = not menu.is_available
        return await self.save(menu, "Failed to update availability")

    async def delete(self, menu_id: int) -> None:
        """Delete the menu; its entries go with it, products stay."""
        menu = await self.get_or_404(menu_id)
        await self.remove(menu, "Menu could not be deleted")

    async def add_product(self, menu_id: int, data: MenuProductCreate) -> MenuProduct:
        await self.get_or_404(menu_id)
        await self.require_reference(Product, data.product_id, "Product")

        entries = MenuProductService(self.session)
        if await entries.exists(
            MenuProduct.menu_id == menu_id,
            MenuProduct.product_id == data.product_id,
        ):
            raise ConflictError("Product already in menu")

        entry = MenuProduct(menu_id=menu_id, **data.model_dump())
        entry = await entries.save(entry, "Product already in menu")
        logger.info(f"Product #{entry.product_id} added to menu #{menu_id}")
        return entry

    async def list_products(self, menu_id: int) -> list[MenuProduct]:
        await self.get_or_404(menu_id)
        result = await self.session.execute(
            select(MenuProduct)
            .where(MenuProduct.menu_id == menu_id)
            .order_by(MenuProduct.display_order, MenuProduct.id)
        )
        return list(result.scalars().all())


class MenuProductService(CrudService[MenuProduct]):
    model = MenuProduct
    entity_name = "Menu product"

    async def delete(self, entry_id: int) -> None:
        entry = await self.get_or_404(entry_id)
        await self.remove(entry, "Menu product could not be deleted")
