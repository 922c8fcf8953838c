"""
Pydantic Schemas for Request/Response Validation

Create schemas carry required fields; Update schemas make every field
optional and are applied as partial merges (unset and null fields are
ignored). Response schemas are built from ORM objects.

Version: 1.0.0
"""

import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wacdo.models import SelectionMode


EMAIL_PATTERN = re.compile(r'^[\w\.\+-]+@[\w\.-]+\.\w+$')


def _validate_email(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip().lower()
    if not EMAIL_PATTERN.match(v):
        raise ValueError('Invalid email format')
    return v


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# COMMON
# =============================================================================

class MessageResponse(BaseModel):
    """Acknowledgement for deletions."""
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime


# =============================================================================
# ROLES
# =============================================================================

class RoleCreate(BaseModel):
    role_name: str = Field(..., min_length=1, max_length=50, examples=["manager"])
    description: Optional[str] = Field(None, max_length=255)
    permissions: Optional[str] = Field(None, examples=["orders:read,orders:write"])


class RoleUpdate(BaseModel):
    role_name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    permissions: Optional[str] = None


class RoleResponse(ORMModel):
    id: int
    role_name: str
    description: Optional[str]
    permissions: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


# =============================================================================
# USERS
# =============================================================================

class UserCreate(BaseModel):
    """Registration payload. Password strength is checked by the service."""
    username: Optional[str] = Field(None, max_length=100, examples=["jdoe"])
    email: str = Field(..., max_length=255, examples=["jdoe@example.com"])
    password: str = Field(..., min_length=1, max_length=128)
    roles_id: int = Field(..., gt=0)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, min_length=1, max_length=128)
    roles_id: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return _validate_email(v)


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(ORMModel):
    id: int
    username: Optional[str]
    email: str
    roles_id: int
    is_active: bool
    role: RoleResponse
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


# =============================================================================
# CATEGORIES
# =============================================================================

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Drinks"])
    description: Optional[str] = None
    display_order: int = Field(default=0, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    display_order: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)


class CategoryResponse(ORMModel):
    id: int
    name: str
    description: Optional[str]
    display_order: int
    image_url: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


# =============================================================================
# PRODUCTS
# =============================================================================

class ProductCreate(BaseModel):
    category_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=100, examples=["Cheeseburger"])
    description: Optional[str] = None
    price: float = Field(..., ge=0, examples=[6.5])
    stock_quantity: int = Field(default=0, ge=0)
    is_available: bool = True
    preparation_time: int = Field(default=0, ge=0, description="Minutes")


class ProductUpdate(BaseModel):
    category_id: Optional[int] = Field(None, gt=0)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    preparation_time: Optional[int] = Field(None, ge=0)


class StockUpdate(BaseModel):
    stock_quantity: int = Field(..., ge=0, examples=[100])


class ProductResponse(ORMModel):
    id: int
    category_id: int
    category: CategoryResponse
    name: str
    description: Optional[str]
    price: float
    stock_quantity: int
    is_available: bool
    preparation_time: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


# =============================================================================
# PRODUCT OPTIONS
# =============================================================================

class OptionCreate(BaseModel):
    """``selection_mode`` is checked against single/multiple by the service."""
    product_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=100, examples=["Size"])
    selection_mode: str = Field(..., examples=["single", "multiple"])
    is_required: bool = False


class OptionUpdate(BaseModel):
    product_id: Optional[int] = Field(None, gt=0)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    selection_mode: Optional[str] = None
    is_required: Optional[bool] = None


class OptionResponse(ORMModel):
    id: int
    product_id: int
    name: str
    selection_mode: SelectionMode
    is_required: bool


class OptionValueCreate(BaseModel):
    value: str = Field(..., min_length=1, max_length=100, examples=["Large"])
    option_price: float = Field(default=0.0, examples=[1.5])


class OptionValueUpdate(BaseModel):
    option_id: Optional[int] = Field(None, gt=0)
    value: Optional[str] = Field(None, min_length=1, max_length=100)
    option_price: Optional[float] = None


class OptionValueResponse(ORMModel):
    id: int
    option_id: int
    value: str
    option_price: float


# =============================================================================
# MENUS
# =============================================================================

class MenuCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Best Of"])
    description: Optional[str] = Field(None, max_length=255)
    price: float = Field(..., ge=0, examples=[9.9])
    is_available: bool = True


class MenuUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    is_available: Optional[bool] = None


class MenuProductCreate(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(default=1, ge=1)
    is_optional: bool = False
    display_order: int = Field(default=0, ge=0)


class MenuProductResponse(ORMModel):
    id: int
    menu_id: int
    product_id: int
    quantity: int
    is_optional: bool
    display_order: int


class MenuResponse(ORMModel):
    id: int
    name: str
    description: Optional[str]
    price: float
    is_available: bool
    menu_products: List[MenuProductResponse]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
