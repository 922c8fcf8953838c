"""
SQLAlchemy Database Models

Catalog and account tables:
- Roles and users (exactly one role per user)
- Categories, products, product options and option values
- Menus and the products composing them

Every "unique within scope" rule is also declared as a storage constraint so
concurrent writers cannot both pass the application-level pre-check.

Version: 1.0.0
"""

import enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from wacdo.database import Base


class SelectionMode(str, enum.Enum):
    """How many values of an option a customer may pick."""
    SINGLE = "single"
    MULTIPLE = "multiple"


# =============================================================================
# ACCOUNTS
# =============================================================================

class Role(Base):
    """Named permission bundle."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    role_name = Column(String(50), unique=True, nullable=False)
    description = Column(String(255), nullable=True)
    permissions = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Role #{self.id} - {self.role_name}>"


class User(Base):
    """
    Registered account.

    ``password`` always holds a bcrypt hash; plaintext is never stored.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    roles_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    role = relationship("Role")

    def __repr__(self):
        return f"<User #{self.id} - {self.email}>"


# =============================================================================
# CATALOG
# =============================================================================

class Category(Base):
    """Named grouping for products."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    image_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Category #{self.id} - {self.name}>"


class Product(Base):
    """Sellable item belonging to exactly one category."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0.0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    preparation_time = Column(Integer, nullable=False, default=0)  # minutes

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("Category")

    def __repr__(self):
        return f"<Product #{self.id} - {self.name}>"


class ProductOption(Base):
    """Customisation attached to a product (e.g. Size, Toppings)."""
    __tablename__ = "product_options"
    __table_args__ = (
        UniqueConstraint("product_id", "name", name="uq_product_options_product_name"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    selection_mode = Column(Enum(SelectionMode), nullable=False, default=SelectionMode.SINGLE)
    is_required = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<ProductOption #{self.id} - {self.name} ({self.selection_mode.value})>"


class OptionValue(Base):
    """One choice of an option, with the price it adds."""
    __tablename__ = "option_values"
    __table_args__ = (
        UniqueConstraint("option_id", "value", name="uq_option_values_option_value"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    option_id = Column(Integer, ForeignKey("product_options.id"), nullable=False, index=True)
    value = Column(String(100), nullable=False)
    option_price = Column(Float, nullable=False, default=0.0)

    def __repr__(self):
        return f"<OptionValue #{self.id} - {self.value}>"


# =============================================================================
# MENUS
# =============================================================================

class Menu(Base):
    """Named, priced bundle of products."""
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(255), nullable=True)
    price = Column(Float, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Deleting a menu deletes its entries; products are untouched
    menu_products = relationship(
        "MenuProduct",
        back_populates="menu",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MenuProduct.display_order",
    )

    def __repr__(self):
        return f"<Menu #{self.id} - {self.name}>"


class MenuProduct(Base):
    """A product's place inside a menu."""
    __tablename__ = "menu_products"
    __table_args__ = (
        UniqueConstraint("menu_id", "product_id", name="uq_menu_products_menu_product"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    menu_id = Column(Integer, ForeignKey("menus.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    is_optional = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)

    menu = relationship("Menu", back_populates="menu_products")

    def __repr__(self):
        return f"<MenuProduct #{self.id} - menu {self.menu_id} / product {self.product_id}>"
