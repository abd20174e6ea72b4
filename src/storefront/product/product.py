"""Product aggregate root."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.money import effective_price

# Fields an admin may change through UpdateProduct
EDITABLE_FIELDS = (
    "name",
    "description",
    "price",
    "discount_percentage",
    "category_id",
    "stock",
    "rating",
    "num_reviews",
    "is_active",
)


# Matches the image column of an order line snapshot
MAX_IMAGE_URL_LENGTH = 500


def _dump_images(images):
    if images is None:
        return "[]"
    return images if isinstance(images, str) else json.dumps(list(images))


def _dump_specifications(specifications):
    if specifications is None:
        return "{}"
    return specifications if isinstance(specifications, str) else json.dumps(dict(specifications))


@storefront.aggregate
class Product:
    """A sellable item in the catalogue.

    `images` is an ordered list of URLs and `specifications` a free-form
    string-keyed map; both are stored as JSON text. Stock never goes negative.
    """

    name: String(required=True, max_length=255)
    description: Text(default="")
    price: Float(required=True, min_value=0.0)
    discount_percentage: Float(default=0.0, min_value=0.0, max_value=100.0)
    images: Text(default="[]")
    category_id: Identifier(required=True)
    stock: Integer(default=0, min_value=0)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    specifications: Text(default="{}")
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def images_must_be_a_list_of_urls(self):
        try:
            images = json.loads(self.images or "[]")
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"images": ["Images must be valid JSON"]})
        if not isinstance(images, list) or not all(isinstance(url, str) for url in images):
            raise ValidationError({"images": ["Images must be a list of URLs"]})
        if any(len(url) > MAX_IMAGE_URL_LENGTH for url in images):
            raise ValidationError({"images": [f"Image URLs must be at most {MAX_IMAGE_URL_LENGTH} characters"]})

    @invariant.post
    def specifications_must_be_a_map(self):
        try:
            specs = json.loads(self.specifications or "{}")
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"specifications": ["Specifications must be valid JSON"]})
        if not isinstance(specs, dict):
            raise ValidationError({"specifications": ["Specifications must be an object"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        category_id,
        description=None,
        discount_percentage=0.0,
        images=None,
        stock=0,
        is_active=True,
        specifications=None,
    ):
        from storefront.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description or "",
            price=price,
            discount_percentage=discount_percentage or 0.0,
            images=_dump_images(images),
            category_id=category_id,
            stock=stock or 0,
            is_active=is_active,
            specifications=_dump_specifications(specifications),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                category_id=category_id,
                price=price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def image_list(self) -> list[str]:
        return json.loads(self.images or "[]")

    def specification_map(self) -> dict:
        return json.loads(self.specifications or "{}")

    def primary_image(self) -> str:
        images = self.image_list()
        return images[0] if images else ""

    def effective_price(self) -> float:
        return effective_price(self.price, self.discount_percentage)

    def update_details(self, images=None, specifications=None, **changes):
        """Apply the non-None values in `changes`; unknown keys are ignored."""
        from storefront.product.events import ProductUpdated

        for field in EDITABLE_FIELDS:
            value = changes.get(field)
            if value is not None:
                setattr(self, field, value)
        if images is not None:
            self.images = _dump_images(images)
        if specifications is not None:
            self.specifications = _dump_specifications(specifications)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                discount_percentage=self.discount_percentage,
                stock=self.stock,
                is_active=self.is_active,
            )
        )

    def decrement_stock(self, quantity):
        """Remove `quantity` units from stock, clamping at zero."""
        from storefront.product.events import StockDecremented

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous = self.stock
        self.stock = max(0, previous - quantity)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockDecremented(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
            )
        )
