"""
Product Option and Option Value Services

An option name is unique per product and a value is unique per option.
Values are created in batches: either the whole batch is stored or none of
it is.
"""

import logging

from sqlalchemy import delete as sql_delete

from wacdo.core.exceptions import ConflictError, NotFoundError, ValidationError
from wacdo.models import OptionValue, Product, ProductOption, SelectionMode
from wacdo.schemas import OptionCreate, OptionUpdate, OptionValueCreate, OptionValueUpdate
from wacdo.services.catalog.base import CrudService, changes_from

logger = logging.getLogger(__name__)


def parse_selection_mode(value: str) -> SelectionMode:
    try:
        return SelectionMode(value)
    except ValueError:
        raise ValidationError("selection_mode must be 'single' or 'multiple'")


class OptionService(CrudService[ProductOption]):
    model = ProductOption
    entity_name = "Option"

    async def create(self, data: OptionCreate) -> ProductOption:
        await self.require_reference(Product, data.product_id, "Product")
        mode = parse_selection_mode(data.selection_mode)

        if await self.exists(
            ProductOption.product_id == data.product_id,
            ProductOption.name == data.name,
        ):
            raise ConflictError("Option already exists for this product")

        option = ProductOption(
            product_id=data.product_id,
            name=data.name,
            selection_mode=mode,
            is_required=data.is_required,
        )
        option = await self.save(option, "Option already exists for this product")
        logger.info(f"Option #{option.id} '{option.name}' created for product #{option.product_id}")
        return option

    async def update(self, option_id: int, data: OptionUpdate) -> ProductOption:
        option = await self.get_or_404(option_id)
        changes = changes_from(data)

        if "selection_mode" in changes:
            changes["selection_mode"] = parse_selection_mode(changes["selection_mode"])

        product_id = changes.get("product_id", option.product_id)
        if product_id != option.product_id:
            await self.require_reference(Product, product_id, "Product")

        if "name" in changes or "product_id" in changes:
            name = changes.get("name", option.name)
            if await self.exists(
                ProductOption.product_id == product_id,
                ProductOption.name == name,
                ProductOption.id != option_id,
            ):
                raise ConflictError("Option name already exists for this product")

        return await self.save(self.apply(option, changes), "Option name already exists for this product")

    async def list_by_product(self, product_id: int) -> list[ProductOption]:
        if not await self.exists(Product.id == product_id):
            raise NotFoundError("Product not found")
        return await self.list_all(ProductOption.product_id == product_id)

    async def delete(self, option_id: int) -> None:
        """Delete the option together with its values."""
        option = await self.get_or_404(option_id)
        await self.session.execute(
            sql_delete(OptionValue).where(OptionValue.option_id == option_id)
        )
        await self.remove(option, "Option could not be deleted")


class OptionValueService(CrudService[OptionValue]):
    model = OptionValue
    entity_name = "Option value"

    async def create_many(self, option_id: int, values: list[OptionValueCreate]) -> list[OptionValue]:
        await OptionService(self.session).get_or_404(option_id)

        if not values:
            raise ValidationError("Invalid data, expected an array of values")

        seen: set[str] = set()
        for item in values:
            if item.value in seen or await self.exists(
                OptionValue.option_id == option_id,
                OptionValue.value == item.value,
            ):
                raise ConflictError(f"Value '{item.value}' already exists for this option")
            seen.add(item.value)

        created = [
            OptionValue(option_id=option_id, value=item.value, option_price=item.option_price)
            for item in values
        ]
        self.session.add_all(created)
        await self.commit("Option values already exist for this option")
        logger.info(f"{len(created)} value(s) added to option #{option_id}")
        return created

    async def list_by_option(self, option_id: int) -> list[OptionValue]:
        await OptionService(self.session).get_or_404(option_id)
        return await self.list_all(OptionValue.option_id == option_id)

    async def update(self, value_id: int, data: OptionValueUpdate) -> OptionValue:
        option_value = await self.get_or_404(value_id)
        changes = changes_from(data)

        option_id = changes.get("option_id", option_value.option_id)
        if option_id != option_value.option_id:
            await self.require_reference(ProductOption, option_id, "Option")

        if "value" in changes or "option_id" in changes:
            value = changes.get("value", option_value.value)
            if await self.exists(
                OptionValue.option_id == option_id,
                OptionValue.value == value,
                OptionValue.id != value_id,
            ):
                raise ConflictError("Value already exists for this option")

        return await self.save(self.apply(option_value, changes), "Value already exists for this option")

    async def delete(self, value_id: int) -> None:
        option_value = await self.get_or_404(value_id)
        await self.remove(option_value, "Option value could not be deleted")
