"""
Pydantic schemas for request bodies and responses.

Request schemas only describe shape; business rules (roles, password
length, score range, order totals) are enforced by the validators in
shared.utils.validators so they return 400 with a domain message.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

OrderStatusName = Literal["PENDING", "PAID", "DELIVERED", "CANCELLED"]

# Money is rendered as a two-decimal string ("20.00")
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(Decimal(v).quantize(Limits.MONEY_QUANTUM)), return_type=str),
]


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str


class PaginationMeta(BaseModel):
    limit: int
    offset: int
    page: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=Limits.MAX_PASSWORD_LENGTH)


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserOutput(ORMModel):
    id: int
    name: str
    email: str
    role: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Returned by register, login and refresh."""

    token: str
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    expires_in: int  # seconds
    message: str
    user: UserOutput


class PrincipalOutput(BaseModel):
    """Identity carried by the current access token."""

    user_id: int
    email: str
    role: str


# =============================================================================
# User Schemas
# =============================================================================


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr
    password: str
    # CLIENT when omitted; RESTAURANT for owners
    role: Optional[str] = None
    phone: Optional[str] = None
    address: str = Field(min_length=1)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    phone: Optional[str] = None
    address: Optional[str] = None
    # Ignored when empty
    password: Optional[str] = None


# =============================================================================
# Cuisine Schemas
# =============================================================================


class CuisineOutput(ORMModel):
    id: int
    name: str


# =============================================================================
# Category Schemas
# =============================================================================


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None


class CategoryOutput(ORMModel):
    id: int
    name: str
    description: Optional[str] = None


class CategoryDeletionOutput(BaseModel):
    restaurant_id: int
    category_id: int
    disassociated: bool
    deleted_globally: bool


# =============================================================================
# Restaurant Schemas
# =============================================================================


class RestaurantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str = Field(min_length=1)
    cuisine_id: int
    phone: str = Field(min_length=1)
    email: EmailStr
    address: str = Field(min_length=1)
    opening_hours: Optional[str] = None
    logo: Optional[str] = None
    cover_image: Optional[str] = None


class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = None
    cuisine_id: Optional[int] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    opening_hours: Optional[str] = None
    logo: Optional[str] = None
    cover_image: Optional[str] = None


class RestaurantOutput(BaseModel):
    id: int
    owner_id: int
    name: str
    description: str
    cuisine_id: int
    cuisine_name: Optional[str] = None
    phone: str
    email: str
    address: str
    opening_hours: Optional[str] = None
    logo: Optional[str] = None
    cover_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RestaurantWithCategoriesOutput(RestaurantOutput):
    categories: list[CategoryOutput] = Field(default_factory=list)


class RatingOutput(BaseModel):
    restaurant_id: int
    review_count: int
    average_score: Optional[float] = None


# =============================================================================
# Product Schemas
# =============================================================================


class ProductCreate(BaseModel):
    restaurant_id: int
    category_id: int
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = None
    price: Decimal
    image: Optional[str] = None
    is_active: bool = True
    quantity: int = Field(default=0, ge=0)


class ProductUpdate(BaseModel):
    """Partial update. category_name is resolved with find-or-create."""

    category_id: Optional[int] = None
    category_name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    name: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None
    is_active: Optional[bool] = None
    quantity: Optional[int] = Field(default=None, ge=0)


class ProductOutput(BaseModel):
    id: int
    restaurant_id: int
    category_id: int
    category_name: str
    name: str
    description: Optional[str] = None
    price: Money
    image: Optional[str] = None
    is_active: bool
    quantity: int


class ProductSummary(BaseModel):
    """Lean product view for search and category listings."""

    id: int
    name: str
    price: Money
    image: Optional[str] = None
    is_active: bool
    restaurant_id: int
    restaurant_name: str


class CategoryProductsOutput(BaseModel):
    """One section of a restaurant menu."""

    category_id: int
    category_name: str
    products: list[ProductOutput]


# =============================================================================
# Order Schemas
# =============================================================================


class OrderLineCreate(BaseModel):
    product_id: int
    quantity: int
    subtotal: Decimal


class OrderCreate(BaseModel):
    restaurant_id: int
    # Must be the caller when given
    client_id: Optional[int] = None
    total: Decimal
    comments: Optional[str] = Field(default=None, max_length=Limits.MAX_COMMENTS_LENGTH)
    details: list[OrderLineCreate] = Field(default_factory=list)


class OrderUpdate(BaseModel):
    status: Optional[OrderStatusName] = None
    comments: Optional[str] = Field(default=None, max_length=Limits.MAX_COMMENTS_LENGTH)


class OrderDetailOutput(BaseModel):
    id: int
    product_id: int
    product_name: str
    quantity: int
    product_price: Money
    subtotal: Money


class OrderOutput(BaseModel):
    id: int
    client_id: int
    restaurant_id: int
    restaurant_name: str
    status: OrderStatusName
    total: Money
    comments: Optional[str] = None
    details: list[OrderDetailOutput]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderPage(BaseModel):
    items: list[OrderOutput]
    pagination: PaginationMeta


# =============================================================================
# Review Schemas
# =============================================================================


class ReviewCreate(BaseModel):
    restaurant_id: int
    score: int
    comments: Optional[str] = Field(default=None, max_length=Limits.MAX_COMMENTS_LENGTH)


class ReviewUpdate(BaseModel):
    score: Optional[int] = None
    comments: Optional[str] = Field(default=None, max_length=Limits.MAX_COMMENTS_LENGTH)


class ReviewOutput(BaseModel):
    id: int
    restaurant_id: int
    user_id: int
    user_name: str
    score: int
    comments: Optional[str] = None
    created_at: Optional[datetime] = None


# =============================================================================
# Health
# =============================================================================


class HealthOutput(BaseModel):
    status: Literal["healthy", "degraded"]
    service: str
    environment: str
    database: Optional[str] = None
