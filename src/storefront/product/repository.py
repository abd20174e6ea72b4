"""Repository for the Product aggregate: paginated listings and search."""

from protean.utils.query import Q

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.repository(part_of=Product)
class ProductRepository:
    def _page(self, query, page: int, limit: int):
        return query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def list_active(self, page: int, limit: int):
        return self._page(self._dao.query.filter(is_active=True), page, limit)

    def list_all(self, page: int, limit: int):
        return self._page(self._dao.query, page, limit)

    def search(self, term: str, page: int, limit: int):
        """Case-insensitive substring match on name or description among active products."""
        matches = Q(name__icontains=term) | Q(description__icontains=term)
        return self._page(self._dao.query.filter(matches).filter(is_active=True), page, limit)

    def list_by_category(self, category_id: str, page: int, limit: int):
        query = self._dao.query.filter(category_id=str(category_id), is_active=True)
        return self._page(query, page, limit)

    def count_in_category(self, category_id: str) -> int:
        return self._dao.query.filter(category_id=str(category_id)).all().total

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
