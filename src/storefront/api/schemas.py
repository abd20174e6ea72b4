"""Pydantic request/response schemas for the Storefront API.

Responses are built from aggregates with the `from_*` constructors; the user's
password hash and account tokens never leave the domain.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from storefront.order.order import OrderStatus
from storefront.product.product import MAX_IMAGE_URL_LENGTH
from storefront.user.passwords import MAX_PASSWORD_BYTES
from storefront.user.user import Role

ImageUrl = Annotated[str, Field(max_length=MAX_IMAGE_URL_LENGTH)]

# --- Auth Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "password": "analytical-engine",
                    "phone": "+44 20 7946 0000",
                    "address": "12 St James's Square, London",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)
    phone: str | None = Field(None, max_length=30)
    address: str | None = Field(None, max_length=500)
    avatar: str | None = Field(None, max_length=500)


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "ada@example.com", "password": "analytical-engine"}]}}

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=100)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=100)
    new_password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)


# --- User Request Schemas ---


class UpdateUserRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=254)
    password: str | None = Field(None, min_length=6, max_length=MAX_PASSWORD_BYTES)
    phone: str | None = Field(None, max_length=30)
    address: str | None = Field(None, max_length=500)
    avatar: str | None = Field(None, max_length=500)


class UpdateProfileRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Ada King", "phone": "+44 20 7946 0001"}]}}

    name: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=6, max_length=MAX_PASSWORD_BYTES)
    phone: str | None = Field(None, max_length=30)
    address: str | None = Field(None, max_length=500)
    avatar: str | None = Field(None, max_length=500)


class ChangeRoleRequest(BaseModel):
    role: Role


# --- Catalogue Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Keyboards", "description": "Mechanical and membrane keyboards"}]}
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    is_active: bool = True


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    is_active: bool | None = None


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Split Ergonomic Keyboard",
                    "description": "Tented split keyboard with hot-swappable switches.",
                    "price": 50.0,
                    "discount_percentage": 20,
                    "images": ["https://cdn.example.com/kb-front.jpg"],
                    "category_id": "c3d4e5f6-a7b8-9012-cdef-123456789012",
                    "stock": 25,
                    "specifications": {"layout": "ANSI", "switches": "brown"},
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    discount_percentage: float = Field(0, ge=0, le=100)
    images: list[ImageUrl] = Field(default_factory=list)
    category_id: str
    stock: int = Field(0, ge=0)
    is_active: bool = True
    specifications: dict[str, str | int | float | bool] = Field(default_factory=dict)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    discount_percentage: float | None = Field(None, ge=0, le=100)
    images: list[ImageUrl] | None = None
    category_id: str | None = None
    stock: int | None = Field(None, ge=0)
    rating: float | None = Field(None, ge=0, le=5)
    num_reviews: int | None = Field(None, ge=0)
    is_active: bool | None = None
    specifications: dict[str, str | int | float | bool] | None = None


# --- Order Request Schemas ---


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class ShippingAddressSchema(BaseModel):
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901", "quantity": 3}],
                    "shipping_address": {
                        "address": "221B Baker Street",
                        "city": "London",
                        "postal_code": "NW1 6XE",
                        "country": "United Kingdom",
                    },
                    "payment_method": "card",
                }
            ]
        }
    }

    items: list[OrderLineRequest]
    shipping_address: ShippingAddressSchema
    payment_method: str = Field(..., min_length=1, max_length=50)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus
    tracking_number: str | None = Field(None, max_length=255)


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    avatar: str = ""
    phone: str = ""
    address: str = ""
    is_email_verified: bool = False
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            avatar=user.avatar or "",
            phone=user.phone or "",
            address=user.address or "",
            is_email_verified=bool(user.is_email_verified),
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class PaginatedUsers(BaseModel):
    users: list[UserResponse]
    total: int
    page: int
    limit: int


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str = ""
    image: str = ""
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            description=category.description or "",
            image=category.image or "",
            is_active=bool(category.is_active),
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str = ""
    price: float
    discount_percentage: float = 0.0
    effective_price: float
    images: list[str] = Field(default_factory=list)
    category_id: str
    stock: int = 0
    rating: float = 0.0
    num_reviews: int = 0
    is_active: bool = True
    specifications: dict = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description or "",
            price=product.price,
            discount_percentage=product.discount_percentage or 0.0,
            effective_price=product.effective_price(),
            images=product.image_list(),
            category_id=str(product.category_id),
            stock=product.stock,
            rating=product.rating or 0.0,
            num_reviews=product.num_reviews or 0,
            is_active=bool(product.is_active),
            specifications=product.specification_map(),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class PaginatedProducts(BaseModel):
    products: list[ProductResponse]
    total: int
    page: int
    limit: int


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    price: float
    quantity: int
    image: str = ""


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    shipping_address: ShippingAddressSchema
    payment_method: str
    items_price: float
    tax_price: float
    shipping_price: float
    total_price: float
    is_paid: bool = False
    paid_at: datetime | None = None
    is_delivered: bool = False
    delivered_at: datetime | None = None
    status: str
    tracking_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        address = order.shipping_address
        pricing = order.pricing
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    image=item.image or "",
                )
                for item in order.items
            ],
            shipping_address=ShippingAddressSchema(
                address=address.address,
                city=address.city,
                postal_code=address.postal_code,
                country=address.country,
            ),
            payment_method=order.payment_method,
            items_price=pricing.items_price,
            tax_price=pricing.tax_price,
            shipping_price=pricing.shipping_price,
            total_price=pricing.total_price,
            is_paid=bool(order.is_paid),
            paid_at=order.paid_at,
            is_delivered=bool(order.is_delivered),
            delivered_at=order.delivered_at,
            status=order.status,
            tracking_number=order.tracking_number,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class MessageResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"message": "ok"}]}}

    message: str = "ok"


class PaginatedOrders(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    limit: int
