"""
Unit tests for the quote and event profit calculators.
"""
import pytest

from app.services.errors import DomainError
from app.services.pricing_service import (
    UPCHARGE_OPTIONS,
    QuoteValidationError,
    Upcharge,
    calculate_event_profit,
    calculate_quote,
    price_menu_line,
    resolve_upcharges,
    toggle_upcharge,
)


def quote(adults, children, upcharges=(), gratuity=20.0):
    return calculate_quote(
        adult_count=adults,
        child_count=children,
        upcharges=list(upcharges),
        adult_base_price=60.0,
        child_base_price=30.0,
        gratuity_percent=gratuity,
    )


class TestCalculateQuote:
    """Guest-based quote pricing."""

    def test_concrete_quote(self):
        """10 adults, 2 children, one $7 upcharge at 20% gratuity."""
        result = quote(10, 2, [Upcharge("Filet Mignon", 7.0)])
        assert result.per_guest_upcharge == 7.0
        assert result.adult_total == pytest.approx(670.0)
        assert result.child_total == pytest.approx(74.0)
        assert result.subtotal == pytest.approx(744.0)
        assert result.gratuity_amount == pytest.approx(148.8)
        assert result.total == pytest.approx(892.8)

    def test_zero_guests_is_zero(self):
        result = quote(0, 0, [Upcharge("Filet Mignon", 7.0), Upcharge("Scallops", 5.0)])
        assert result.subtotal == 0
        assert result.gratuity_amount == 0
        assert result.total == 0

    @pytest.mark.parametrize("children", [0, 3])
    def test_subtotal_linear_in_adults(self, children):
        upcharges = [Upcharge("Scallops", 5.0)]
        base = quote(0, children, upcharges).subtotal
        step = quote(1, children, upcharges).subtotal - base
        for adults in range(2, 6):
            assert quote(adults, children, upcharges).subtotal == pytest.approx(base + adults * step)

    def test_subtotal_linear_in_children(self):
        base = quote(4, 0).subtotal
        step = quote(4, 1).subtotal - base
        assert quote(4, 7).subtotal == pytest.approx(base + 7 * step)

    @pytest.mark.parametrize("gratuity", [0, 12.5, 18, 100])
    def test_total_is_subtotal_plus_gratuity(self, gratuity):
        result = quote(8, 3, [Upcharge("Filet Mignon", 7.0)], gratuity=gratuity)
        assert result.total == pytest.approx(result.subtotal + result.subtotal * gratuity / 100)

    def test_more_than_two_upcharges_rejected(self):
        with pytest.raises(QuoteValidationError, match="At most 2"):
            quote(1, 0, resolve_upcharges(["Shrimp", "Chicken", "Steak"]))

    def test_negative_guest_count_rejected(self):
        with pytest.raises(QuoteValidationError):
            quote(-1, 0)

    def test_gratuity_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            quote(1, 1, gratuity=101)


class TestUpchargeSelection:
    """Upcharge catalog lookup and the selection toggle."""

    def test_catalog_amounts(self):
        assert UPCHARGE_OPTIONS["Filet Mignon"].amount == 7.0
        assert UPCHARGE_OPTIONS["Scallops"].amount == 5.0
        assert UPCHARGE_OPTIONS["Chicken"].amount == 0.0

    def test_unknown_upcharge(self):
        with pytest.raises(QuoteValidationError, match="Unknown upcharge option: Lobster"):
            resolve_upcharges(["Lobster"])

    def test_toggle_adds_and_removes(self):
        assert toggle_upcharge([], "Steak") == ["Steak"]
        assert toggle_upcharge(["Steak", "Shrimp"], "Steak") == ["Shrimp"]

    def test_toggle_full_selection_unchanged(self):
        assert toggle_upcharge(["Steak", "Shrimp"], "Scallops") == ["Steak", "Shrimp"]


class TestEventProfit:
    """Per-event profit projection."""

    def test_percentage_food_cost(self):
        result = calculate_event_profit(
            number_of_guests=50,
            price_per_person=85.0,
            gratuity_percent=18.0,
            labor_costs=[400.0, 250.0],
            misc_expenses=[150.0],
        )
        # 50 * 85 = 4250 base, 765 gratuity, food 30% of base = 1275
        assert result.base_revenue == pytest.approx(4250.0)
        assert result.gratuity_amount == pytest.approx(765.0)
        assert result.total_revenue == pytest.approx(5015.0)
        assert result.food_cost == pytest.approx(1275.0)
        assert result.total_costs == pytest.approx(2075.0)
        assert result.actual_profit == pytest.approx(2940.0)
        assert result.business_tax == pytest.approx(2940.0 * 0.08)
        assert result.net_profit == pytest.approx(2940.0 * 0.92)
        assert result.target_revenue == pytest.approx(2075.0 / 0.75)

    def test_no_guests_guards(self):
        result = calculate_event_profit(
            number_of_guests=0,
            price_per_person=0.0,
            gratuity_percent=18.0,
            labor_costs=[100.0],
            misc_expenses=[],
        )
        assert result.actual_profit_percentage == 0
        assert result.business_tax == 0
        assert result.adjusted_price_per_person == 0
        assert result.break_even_guests == 0

    def test_fixed_food_cost_and_break_even(self):
        result = calculate_event_profit(
            number_of_guests=10,
            price_per_person=100.0,
            gratuity_percent=0.0,
            labor_costs=[],
            misc_expenses=[],
            food_cost_mode="fixed",
            food_cost_fixed=250.0,
        )
        assert result.food_cost == 250.0
        assert result.break_even_guests == 3

    def test_target_margin_of_100_rejected(self):
        with pytest.raises(QuoteValidationError):
            calculate_event_profit(10, 50.0, 0.0, [], [], target_profit_margin=100)


class TestMenuLine:

    def test_line_total(self):
        assert price_menu_line(12.5, 2, 40) == pytest.approx(1000.0)
        assert price_menu_line(12.5, 1, 0) == 0

    def test_negative_rejected(self):
        with pytest.raises(QuoteValidationError):
            price_menu_line(-1, 1, 10)


def test_quote_errors_are_domain_errors():
    assert issubclass(QuoteValidationError, DomainError)
    with pytest.raises(DomainError):
        resolve_upcharges(["Lobster"])
