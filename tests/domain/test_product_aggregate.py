import pytest
from protean.exceptions import ValidationError
from protean.utils import DomainObjects

from storefront.product.events import ProductCreated, ProductUpdated, StockDecremented
from storefront.product.product import Product


def _product(**overrides):
    defaults = {"name": "Split Keyboard", "price": 50.0, "category_id": "cat-001", "stock": 5}
    defaults.update(overrides)
    product = Product.create(**defaults)
    product._events.clear()
    return product


def test_product_aggregate_element_type():
    assert Product.element_type == DomainObjects.AGGREGATE


class TestProductCreation:
    def test_defaults(self):
        product = Product.create(name="Mouse", price=10.0, category_id="cat-001")
        assert product.stock == 0
        assert product.discount_percentage == 0.0
        assert product.is_active is True
        assert product.image_list() == []
        assert product.specification_map() == {}
        assert product.rating == 0.0
        assert product.num_reviews == 0

    def test_images_and_specifications_round_trip(self):
        product = _product(
            images=["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"],
            specifications={"layout": "ANSI", "weight_g": 850},
        )
        assert product.image_list()[0] == "https://cdn.example.com/a.jpg"
        assert product.primary_image() == "https://cdn.example.com/a.jpg"
        assert product.specification_map() == {"layout": "ANSI", "weight_g": 850}

    def test_raises_created_event(self):
        product = Product.create(name="Mouse", price=10.0, category_id="cat-001", stock=3)
        assert isinstance(product._events[0], ProductCreated)
        assert product._events[0].stock == 3

    @pytest.mark.parametrize("discount", [-1, 101])
    def test_discount_must_be_a_percentage(self, discount):
        with pytest.raises(ValidationError):
            _product(discount_percentage=discount)

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=-0.01)

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(stock=-1)

    def test_images_must_be_a_list(self):
        with pytest.raises(ValidationError):
            _product(images='{"not": "a list"}')

    def test_image_urls_are_bounded(self):
        with pytest.raises(ValidationError) as exc:
            _product(images=["https://cdn.example.com/" + "a" * 600])
        assert "images" in exc.value.messages

    def test_specifications_must_be_a_map(self):
        with pytest.raises(ValidationError):
            _product(specifications="[1, 2]")


class TestEffectivePrice:
    def test_without_discount(self):
        assert _product().effective_price() == 50.0

    def test_with_discount(self):
        assert _product(discount_percentage=20).effective_price() == 40.0


class TestUpdateDetails:
    def test_only_supplied_fields_change(self):
        product = _product(description="Original")
        product.update_details(price=45.0, name=None)
        assert product.price == 45.0
        assert product.name == "Split Keyboard"
        assert product.description == "Original"
        assert isinstance(product._events[-1], ProductUpdated)

    def test_replace_images(self):
        product = _product(images=["https://cdn.example.com/a.jpg"])
        product.update_details(images=["https://cdn.example.com/z.jpg"])
        assert product.image_list() == ["https://cdn.example.com/z.jpg"]

    def test_deactivate(self):
        product = _product()
        product.update_details(is_active=False)
        assert product.is_active is False


class TestDecrementStock:
    def test_decrement(self):
        product = _product(stock=5)
        product.decrement_stock(2)
        assert product.stock == 3
        event = product._events[-1]
        assert isinstance(event, StockDecremented)
        assert (event.previous_stock, event.new_stock) == (5, 3)

    def test_clamps_at_zero(self):
        product = _product(stock=2)
        product.decrement_stock(5)
        assert product.stock == 0

    def test_rejects_non_positive_quantity(self):
        product = _product(stock=2)
        with pytest.raises(ValidationError):
            product.decrement_stock(0)
        assert product.stock == 2
