"""Monetary arithmetic shared by the catalogue and order placement.

Amounts are floats rounded to cents at every step that produces a stored value.
"""


def round_money(amount: float) -> float:
    return round(amount, 2)


def effective_price(price: float, discount_percentage: float | None) -> float:
    """Unit price after the product's percentage discount, rounded to cents."""
    if discount_percentage and discount_percentage > 0:
        return round_money(price * (1 - discount_percentage / 100))
    return round_money(price)
