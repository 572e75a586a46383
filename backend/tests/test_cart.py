"""
Tests for the checkout cart.

Covers line merging, the quantity floor, modifier replacement, discount
toggling and the totals derived from them.
"""
import random

import pytest

from app.schemas.product import Discount, ModifierOption
from app.services.cart import Cart


class TestAddRemove:
    def test_add_same_product_twice_merges(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.add_item(coffee)

        assert len(cart) == 1
        assert cart.lines[0].quantity == 2

    def test_new_products_append_existing_keep_position(self, coffee, bagel):
        cart = Cart()
        cart.add_item(coffee)
        cart.add_item(bagel)
        cart.add_item(coffee)

        assert [line.product_id for line in cart] == ["p-coffee", "p-bagel"]

    def test_new_line_starts_clean(self, coffee):
        cart = Cart()
        line = cart.add_item(coffee)

        assert line.quantity == 1
        assert line.selected_modifiers == []
        assert line.selected_discounts == []

    def test_remove_item(self, coffee, bagel):
        cart = Cart()
        cart.add_item(coffee)
        cart.add_item(bagel)
        cart.remove_item("p-coffee")

        assert [line.product_id for line in cart] == ["p-bagel"]

    def test_remove_absent_is_noop(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.remove_item("nope")

        assert len(cart) == 1


class TestChangeQuantity:
    def test_increment_and_decrement(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.change_quantity("p-coffee", 4)
        cart.change_quantity("p-coffee", -2)

        assert cart.find("p-coffee").quantity == 3

    def test_decrement_to_zero_is_rejected(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.change_quantity("p-coffee", -1)

        assert len(cart) == 1
        assert cart.find("p-coffee").quantity == 1

    def test_large_negative_delta_is_rejected(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.change_quantity("p-coffee", 5)
        cart.change_quantity("p-coffee", -10)

        assert cart.find("p-coffee").quantity == 6

    def test_quantity_never_below_one(self, coffee):
        rng = random.Random(7)
        cart = Cart()
        cart.add_item(coffee)
        for _ in range(500):
            cart.change_quantity("p-coffee", rng.randint(-5, 5))
            assert cart.find("p-coffee").quantity >= 1

    def test_absent_product_is_noop(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.change_quantity("nope", 3)

        assert cart.find("p-coffee").quantity == 1


class TestModifiers:
    def test_second_option_replaces_first(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.toggle_modifier(0, "Size", ModifierOption(name="Regular", price=0))
        cart.toggle_modifier(0, "Size", ModifierOption(name="Large", price=1.5))

        selected = cart.lines[0].selected_modifiers
        assert len(selected) == 1
        assert selected[0].name == "Size"
        assert selected[0].option.name == "Large"

    def test_groups_are_independent(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.toggle_modifier(0, "Size", ModifierOption(name="Large", price=1.5))
        cart.toggle_modifier(0, "Milk", ModifierOption(name="Oat", price=0.5))

        assert [m.name for m in cart.lines[0].selected_modifiers] == ["Size", "Milk"]

    def test_bad_index(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        with pytest.raises(IndexError):
            cart.toggle_modifier(3, "Size", ModifierOption(name="Large", price=1.5))

    def test_negative_index_rejected(self, coffee, bagel):
        cart = Cart()
        cart.add_item(coffee)
        cart.add_item(bagel)
        with pytest.raises(IndexError):
            cart.toggle_modifier(-1, "Size", ModifierOption(name="Large", price=1.5))
        with pytest.raises(IndexError):
            cart.toggle_discount(-1, Discount(name="Coupon", type="fixed", value=3))
        assert all(not line.selected_modifiers and not line.selected_discounts for line in cart)


class TestDiscounts:
    def test_toggle_twice_restores(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        coupon = Discount(name="Coupon", type="fixed", value=3)
        cart.toggle_discount(0, Discount(name="Happy hour", type="percentage", value=10))
        before = list(cart.lines[0].selected_discounts)

        cart.toggle_discount(0, coupon)
        cart.toggle_discount(0, coupon)

        assert cart.lines[0].selected_discounts == before

    def test_selection_order_kept(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.toggle_discount(0, Discount(name="Coupon", type="fixed", value=3))
        cart.toggle_discount(0, Discount(name="Happy hour", type="percentage", value=10))

        assert [d.name for d in cart.lines[0].selected_discounts] == ["Coupon", "Happy hour"]
        assert cart.total() == pytest.approx(6.3)


class TestTotals:
    def test_empty_cart(self):
        cart = Cart()
        assert cart.is_empty
        assert cart.total() == 0

    def test_modifier_and_discount_line(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.add_item(coffee)
        cart.toggle_modifier(0, "Size", ModifierOption(name="Large", price=1.5))
        cart.toggle_discount(0, Discount(name="Happy hour", type="percentage", value=10))

        assert cart.line_total(cart.lines[0]) == pytest.approx(20.70)

    def test_cart_total_sums_lines(self, coffee, bagel):
        cart = Cart()
        cart.add_item(coffee)
        cart.toggle_discount(0, Discount(name="Coupon", type="fixed", value=3))
        cart.add_item(bagel)
        cart.add_item(bagel)

        assert cart.total() == pytest.approx(7.0 + 5.0)

    def test_clear(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        cart.clear()
        assert cart.is_empty
