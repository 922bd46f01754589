"""
Quote pricing and event profit calculations.

Pure arithmetic over caller-supplied numbers; no database access.
"""
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence

from app.config import settings
from app.services.errors import DomainError


class QuoteValidationError(DomainError):
    """Raised when a quote or profit request breaks a pricing precondition"""


@dataclass(frozen=True)
class Upcharge:
    """Per-guest surcharge attached to a premium menu option."""
    name: str
    amount: float


# Premium protein options offered on the quote form
UPCHARGE_OPTIONS: Mapping[str, Upcharge] = MappingProxyType({
    u.name: u for u in (
        Upcharge("Shrimp", 0.0),
        Upcharge("Chicken", 0.0),
        Upcharge("Steak", 0.0),
        Upcharge("Filet Mignon", 7.0),
        Upcharge("Scallops", 5.0),
    )
})


@dataclass(frozen=True)
class QuoteBreakdown:
    per_guest_upcharge: float
    adult_total: float
    child_total: float
    subtotal: float
    gratuity_amount: float
    total: float


def resolve_upcharges(names: Iterable[str]) -> List[Upcharge]:
    """
    Look up upcharges by name in the option catalog.

    Raises:
        QuoteValidationError: If a name is not a known option
    """
    resolved = []
    for name in names:
        if name not in UPCHARGE_OPTIONS:
            raise QuoteValidationError(f"Unknown upcharge option: {name}")
        resolved.append(UPCHARGE_OPTIONS[name])
    return resolved


def toggle_upcharge(selected: Sequence[str], name: str, max_selections: Optional[int] = None) -> List[str]:
    """
    Selection-step toggle: deselect `name` if selected, otherwise add it
    while fewer than `max_selections` are chosen. A full selection is
    returned unchanged.
    """
    if max_selections is None:
        max_selections = settings.MAX_UPCHARGE_SELECTIONS
    current = list(selected)
    if name in current:
        return [n for n in current if n != name]
    if len(current) < max_selections:
        return current + [name]
    return current


def calculate_quote(
    adult_count: int,
    child_count: int,
    upcharges: Sequence[Upcharge],
    adult_base_price: float,
    child_base_price: float,
    gratuity_percent: float,
    max_upcharges: Optional[int] = None,
) -> QuoteBreakdown:
    """
    Price a guest-based quote.

    Every guest pays their base plate price plus the sum of the selected
    upcharges. Gratuity is a percentage of the subtotal.

    Args:
        adult_count: Number of adult guests
        child_count: Number of child guests
        upcharges: Selected upcharges (at most `max_upcharges`)
        adult_base_price: Per-plate price for adults
        child_base_price: Per-plate price for children
        gratuity_percent: Gratuity, 0-100
        max_upcharges: Selection limit, defaults to MAX_UPCHARGE_SELECTIONS

    Returns:
        QuoteBreakdown with subtotal, gratuity and total

    Raises:
        QuoteValidationError: On negative inputs, gratuity outside 0-100 or
            too many upcharges
    """
    if max_upcharges is None:
        max_upcharges = settings.MAX_UPCHARGE_SELECTIONS
    if len(upcharges) > max_upcharges:
        raise QuoteValidationError(f"At most {max_upcharges} upcharges may be selected, got {len(upcharges)}")
    if adult_count < 0 or child_count < 0:
        raise QuoteValidationError("Guest counts cannot be negative")
    if adult_base_price < 0 or child_base_price < 0:
        raise QuoteValidationError("Base prices cannot be negative")
    if not 0 <= gratuity_percent <= 100:
        raise QuoteValidationError("gratuity_percent must be between 0 and 100")
    for upcharge in upcharges:
        if upcharge.amount < 0:
            raise QuoteValidationError(f"Upcharge '{upcharge.name}' cannot be negative")

    per_guest_upcharge = sum(u.amount for u in upcharges)
    adult_total = adult_count * (adult_base_price + per_guest_upcharge)
    child_total = child_count * (child_base_price + per_guest_upcharge)
    subtotal = adult_total + child_total
    gratuity_amount = subtotal * gratuity_percent / 100
    return QuoteBreakdown(
        per_guest_upcharge=per_guest_upcharge,
        adult_total=adult_total,
        child_total=child_total,
        subtotal=subtotal,
        gratuity_amount=gratuity_amount,
        total=subtotal + gratuity_amount,
    )


@dataclass(frozen=True)
class EventProfitBreakdown:
    base_revenue: float
    gratuity_amount: float
    total_revenue: float
    total_labor_costs: float
    food_cost: float
    total_misc_costs: float
    total_costs: float
    actual_profit: float
    actual_profit_percentage: float
    business_tax: float
    net_profit: float
    target_revenue: float
    adjusted_price_per_person: float
    adjusted_profit: float
    break_even_guests: int


def calculate_event_profit(
    number_of_guests: int,
    price_per_person: float,
    gratuity_percent: float,
    labor_costs: Sequence[float],
    misc_expenses: Sequence[float],
    food_cost_mode: str = "percentage",
    food_cost_percentage: float = 30.0,
    food_cost_fixed: float = 0.0,
    target_profit_margin: float = 25.0,
    business_tax_percentage: float = 8.0,
    gratuity_enabled: bool = True,
) -> EventProfitBreakdown:
    """
    Project revenue, costs and profit for a single event, plus the price per
    person needed to hit a target margin and the break-even guest count.

    Raises:
        QuoteValidationError: For an unknown food cost mode or a target
            margin of 100% or more
    """
    if food_cost_mode not in ("percentage", "fixed"):
        raise QuoteValidationError(f"food_cost_mode must be 'percentage' or 'fixed', got {food_cost_mode!r}")
    if target_profit_margin >= 100:
        raise QuoteValidationError("target_profit_margin must be below 100")

    base_revenue = number_of_guests * price_per_person
    gratuity_amount = base_revenue * gratuity_percent / 100 if gratuity_enabled else 0.0
    total_revenue = base_revenue + gratuity_amount

    total_labor_costs = sum(labor_costs)
    if food_cost_mode == "percentage":
        food_cost = base_revenue * food_cost_percentage / 100
    else:
        food_cost = food_cost_fixed
    total_misc_costs = sum(misc_expenses)
    total_costs = total_labor_costs + food_cost + total_misc_costs

    actual_profit = total_revenue - total_costs
    actual_profit_percentage = actual_profit / total_revenue * 100 if total_revenue > 0 else 0.0
    business_tax = actual_profit * business_tax_percentage / 100 if actual_profit > 0 else 0.0

    target_revenue = total_costs / (1 - target_profit_margin / 100)
    adjusted_price = (target_revenue - gratuity_amount) / number_of_guests if number_of_guests > 0 else 0.0

    if price_per_person > 0:
        break_even = math.ceil(total_costs / (price_per_person * (1 + gratuity_percent / 100)))
    else:
        break_even = 0

    return EventProfitBreakdown(
        base_revenue=base_revenue,
        gratuity_amount=gratuity_amount,
        total_revenue=total_revenue,
        total_labor_costs=total_labor_costs,
        food_cost=food_cost,
        total_misc_costs=total_misc_costs,
        total_costs=total_costs,
        actual_profit=actual_profit,
        actual_profit_percentage=actual_profit_percentage,
        business_tax=business_tax,
        net_profit=actual_profit - business_tax,
        target_revenue=target_revenue,
        adjusted_price_per_person=adjusted_price,
        adjusted_profit=target_revenue - total_costs,
        break_even_guests=break_even,
    )


def price_menu_line(per_guest_price: float, quantity: int, guest_count: int) -> float:
    """
    Revenue of one event menu line: every guest is served `quantity`
    portions at `per_guest_price`.

    Raises:
        QuoteValidationError: On a negative price, quantity or guest count
    """
    if per_guest_price < 0 or quantity < 0 or guest_count < 0:
        raise QuoteValidationError("Menu line price, quantity and guest count cannot be negative")
    return per_guest_price * quantity * guest_count
