"""Repository for the Category aggregate."""

from storefront.category.category import Category
from storefront.domain import storefront


@storefront.repository(part_of=Category)
class CategoryRepository:
    # Category listings are unpaginated; `limit(None)` lifts the query's default cap
    def list_active(self) -> list[Category]:
        return self._dao.query.filter(is_active=True).order_by("name").limit(None).all().items

    def list_all(self) -> list[Category]:
        return self._dao.query.order_by("name").limit(None).all().items

    def remove(self, category: Category) -> None:
        self._dao.delete(category)
