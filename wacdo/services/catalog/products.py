"""Category and Product services."""

import logging

from sqlalchemy.orm import selectinload

from wacdo.core.exceptions import ConflictError
from wacdo.models import Category, MenuProduct, Product, ProductOption
from wacdo.schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from wacdo.services.catalog.base import CrudService, changes_from

logger = logging.getLogger(__name__)

CATEGORY_IN_USE = "Cannot delete category: still in use by product"
PRODUCT_IN_USE = "Cannot delete product: still in use by options or menus"


class CategoryService(CrudService[Category]):
    model = Category
    entity_name = "Category"

    async def create(self, data: CategoryCreate) -> Category:
        if await self.exists(Category.name == data.name):
            raise ConflictError("Category already exists")

        category = await self.save(Category(**data.model_dump()), "Category already exists")
        logger.info(f"Category #{category.id} '{category.name}' created")
        return category

    async def update(self, category_id: int, data: CategoryUpdate) -> Category:
        category = await self.get_or_404(category_id)
        changes = changes_from(data)

        if "name" in changes and await self.exists(
            Category.name == changes["name"], Category.id != category_id
        ):
            raise ConflictError("Category name already exists")

        return await self.save(self.apply(category, changes), "Category name already exists")

    async def delete(self, category_id: int) -> None:
        category = await self.get_or_404(category_id)

        if await self.count(Product, Product.category_id == category_id) > 0:
            raise ConflictError(CATEGORY_IN_USE)

        await self.remove(category, CATEGORY_IN_USE)


class ProductService(CrudService[Product]):
    model = Product
    entity_name = "Product"
    load_options = (selectinload(Product.category),)

    async def create(self, data: ProductCreate) -> Product:
        await self.require_reference(Category, data.category_id, "Category")

        if await self.exists(Product.name == data.name):
            raise ConflictError("Product already exists")

        product = await self.save(Product(**data.model_dump()), "Product already exists")
        logger.info(f"Product #{product.id} '{product.name}' created in category #{product.category_id}")
        return product

    async def update(self, product_id: int, data: ProductUpdate) -> Product:
        product = await self.get_or_404(product_id)
        changes = changes_from(data)

        if "name" in changes and await self.exists(
            Product.name == changes["name"], Product.id != product_id
        ):
            raise ConflictError("Product name already exists")

        if "category_id" in changes and changes["category_id"] != product.category_id:
            await self.require_reference(Category, changes["category_id"], "Category")

        return await self.save(self.apply(product, changes), "Product name already exists")

    async def list_by_category(self, category_id: int) -> list[Product]:
        await CategoryService(self.session).get_or_404(category_id)
        return await self.list_all(Product.category_id == category_id)

    async def toggle_availability(self, product_id: int) -> Product:
        product = await self.get_or_404(product_id)
        product.is_available = not product.is_available
        return await self.save(product, "Failed to update availability")

    async def update_stock(self, product_id: int, stock_quantity: int) -> Product:
        product = await self.get_or_404(product_id)
        product.stock_quantity = stock_quantity
        return await self.save(product, "Failed to update stock")

    async def delete(self, product_id: int) -> None:
        product = await self.get_or_404(product_id)

        dependents = (
            await self.count(ProductOption, ProductOption.product_id == product_id)
            + await self.count(MenuProduct, MenuProduct.product_id == product_id)
        )
        if dependents > 0:
            raise ConflictError(PRODUCT_IN_USE)

        await self.remove(product, PRODUCT_IN_USE)
