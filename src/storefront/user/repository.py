"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.user.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def find_by_verification_token(self, token: str) -> User | None:
        if not token:
            return None
        return self._dao.query.filter(email_verification_token=token).all().first

    def find_by_reset_token(self, token: str) -> User | None:
        if not token:
            return None
        return self._dao.query.filter(password_reset_token=token).all().first

    def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        existing = self.find_by_email(email)
        return existing is not None and str(existing.id) != str(exclude_id)

    def list_page(self, page: int, limit: int):
        """Newest accounts first; returns the ResultSet so callers can read `total`."""
        return self._dao.query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def remove(self, user: User) -> None:
        self._dao.delete(user)
