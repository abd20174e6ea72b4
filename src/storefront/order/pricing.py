"""Order pricing: tax and the free-shipping threshold."""

from storefront.shared.money import round_money

TAX_RATE = 0.15
FREE_SHIPPING_THRESHOLD = 100.0
FLAT_SHIPPING_FEE = 10.0


def price_order(lines):
    """Compute the pricing summary for `(unit_price, quantity)` pairs.

    Shipping is free only when the items total strictly exceeds the threshold.
    """
    items_price = round_money(sum(unit_price * quantity for unit_price, quantity in lines))
    tax_price = round_money(items_price * TAX_RATE)
    shipping_price = 0.0 if items_price > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    return {
        "items_price": items_price,
        "tax_price": tax_price,
        "shipping_price": shipping_price,
        "total_price": round_money(items_price + tax_price + shipping_price),
    }
