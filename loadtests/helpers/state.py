"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class AdminState:
    token: str | None = None
    category_id: str | None = None
    product_id: str | None = None

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
