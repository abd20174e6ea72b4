"""Category aggregate root for grouping products."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A flat grouping of products. Inactive categories are hidden from the
    public listing but remain addressable by id."""

    name: String(required=True, max_length=100)
    description: Text(default="")
    image: String(max_length=500, default="")
    is_active: Boolean(default=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, description=None, image=None, is_active=True):
        from storefront.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name,
            description=description or "",
            image=image or "",
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                is_active=category.is_active,
            )
        )
        return category

    def update_details(self, name=None, description=None, image=None, is_active=None):
        from storefront.category.events import CategoryUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if image is not None:
            self.image = image
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CategoryUpdated(
                category_id=self.id,
                name=self.name,
                is_active=self.is_active,
            )
        )
