"""
Ingredient cost aggregation for recipe and event compositions
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Any

CostObserver = Callable[[float], None]


@dataclass(frozen=True)
class IngredientUsage:
    ingredient_id: Any
    quantity: float


def calculate_ingredient_cost(
    usages: Iterable[IngredientUsage],
    catalog: Mapping[Any, float],
    on_total: Optional[CostObserver] = None,
) -> float:
    """
    Sum quantity * cost_per_unit over the usages.

    Usages whose ingredient is missing from `catalog` are skipped.

    Args:
        usages: Ingredient id / quantity pairs
        catalog: ingredient id -> cost per unit
        on_total: Optional callback receiving the computed total

    Returns:
        Total cost
    """
    total = 0.0
    for usage in usages:
        cost_per_unit = catalog.get(usage.ingredient_id)
        if cost_per_unit is None:
            continue
        total += cost_per_unit * usage.quantity
    if on_total is not None:
        on_total(total)
    return total


class IngredientCostTracker:
    """
    Running ingredient selection for a recipe.

    Notifies the observer with the new total whenever it changes.
    """

    def __init__(self, catalog: Mapping[Any, float], on_total: Optional[CostObserver] = None):
        self.catalog = dict(catalog)
        self.on_total = on_total
        self._quantities: Dict[Any, float] = {}
        self._total = 0.0

    @property
    def total(self) -> float:
        return self._total

    @property
    def usages(self) -> List[IngredientUsage]:
        return [IngredientUsage(ingredient_id=k, quantity=q) for k, q in self._quantities.items()]

    def add_ingredient(self, ingredient_id, quantity: float = 1) -> float:
        """Add an ingredient, or bump its quantity if already selected."""
        self._quantities[ingredient_id] = self._quantities.get(ingredient_id, 0) + quantity
        return self._recalculate()

    def update_quantity(self, ingredient_id, quantity: float) -> float:
        """Set a quantity; zero or below removes the ingredient."""
        if quantity <= 0:
            self._quantities.pop(ingredient_id, None)
        else:
            self._quantities[ingredient_id] = quantity
        return self._recalculate()

    def remove_ingredient(self, ingredient_id) -> float:
        return self.update_quantity(ingredient_id, 0)

    def _recalculate(self) -> float:
        total = calculate_ingredient_cost(self.usages, self.catalog)
        if total != self._total:
            self._total = total
            if self.on_total is not None:
                self.on_total(total)
        return total
