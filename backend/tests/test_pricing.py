"""
Tests for line pricing.
"""
import pytest

from app.schemas.product import Discount, ModifierOption
from app.schemas.sale import SelectedModifier
from app.services.pricing import line_total, sum_totals

TEN_PCT = Discount(name="10%", type="percentage", value=10)
THREE_OFF = Discount(name="3 off", type="fixed", value=3)
LARGE = SelectedModifier(name="Size", option=ModifierOption(name="Large", price=1.5))


class TestLineTotal:
    def test_plain_line(self):
        assert line_total(10, 3) == pytest.approx(30.0)

    def test_modifier_and_percentage(self):
        # ((10*2) + (1.50*2)) * 0.9
        assert line_total(10.0, 2, [LARGE], [TEN_PCT]) == pytest.approx(20.70)

    def test_fixed_discount_is_per_unit(self):
        assert line_total(10.0, 1, [], [THREE_OFF]) == pytest.approx(7.0)
        assert line_total(10.0, 2, [], [THREE_OFF]) == pytest.approx(14.0)

    def test_discounts_follow_selection_order(self):
        pct_first = line_total(10.0, 1, [], [TEN_PCT, THREE_OFF])
        fixed_first = line_total(10.0, 1, [], [THREE_OFF, TEN_PCT])
        assert pct_first == pytest.approx(6.0)
        assert fixed_first == pytest.approx(6.3)

    def test_no_rounding(self):
        third = Discount(name="third", type="percentage", value=33.3)
        assert line_total(1.0, 1, [], [third]) == pytest.approx(0.667)
        assert line_total(1.0, 1, [], [third]) != 0.67

    def test_oversized_discount_goes_negative(self):
        big = Discount(name="big", type="percentage", value=150)
        assert line_total(10.0, 1, [], [big]) == pytest.approx(-5.0)

    def test_accepts_plain_dicts(self):
        modifiers = [{"name": "Size", "option": {"name": "Large", "price": 1.5}}]
        discounts = [{"name": "10%", "type": "percentage", "value": 10}]
        assert line_total(10.0, 2, modifiers, discounts) == pytest.approx(20.70)

    def test_unknown_discount_type(self):
        with pytest.raises(ValueError):
            line_total(10.0, 1, [], [{"name": "x", "type": "bogus", "value": 1}])


def test_sum_totals():
    assert sum_totals([0.1, 0.2]) == 0.3
    assert sum_totals([]) == 0.0
