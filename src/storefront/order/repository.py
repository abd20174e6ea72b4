"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def list_page(self, page: int, limit: int):
        """Newest orders first; returns the ResultSet so callers can read `total`."""
        return self._dao.query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def list_for_user(self, user_id: str) -> list[Order]:
        """Every order the user has placed, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items
