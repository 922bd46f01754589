"""
Unit tests for ingredient cost aggregation.
"""
import itertools

import pytest

from app.services.cost_service import IngredientCostTracker, IngredientUsage, calculate_ingredient_cost

CATALOG = {"rice": 1.2, "chicken": 3.5, "butter": 4.0}


class TestCalculateIngredientCost:
    """Sum of quantity x unit cost."""

    def test_total(self):
        usages = [IngredientUsage("rice", 10), IngredientUsage("chicken", 4)]
        assert calculate_ingredient_cost(usages, CATALOG) == pytest.approx(26.0)

    def test_order_independent(self):
        usages = [IngredientUsage("rice", 2.5), IngredientUsage("chicken", 3), IngredientUsage("butter", 0.25)]
        expected = calculate_ingredient_cost(usages, CATALOG)
        for permutation in itertools.permutations(usages):
            assert calculate_ingredient_cost(permutation, CATALOG) == pytest.approx(expected)

    def test_missing_ingredient_skipped(self):
        usages = [IngredientUsage("rice", 1), IngredientUsage("saffron", 100)]
        assert calculate_ingredient_cost(usages, CATALOG) == pytest.approx(1.2)

    def test_empty(self):
        assert calculate_ingredient_cost([], CATALOG) == 0

    def test_observer_receives_total(self):
        seen = []
        calculate_ingredient_cost([IngredientUsage("butter", 2)], CATALOG, on_total=seen.append)
        assert seen == [8.0]


class TestIngredientCostTracker:
    """Running selection with change notifications."""

    def test_add_increments_quantity(self):
        tracker = IngredientCostTracker(CATALOG)
        tracker.add_ingredient("butter", 1)
        tracker.add_ingredient("butter", 2)
        assert tracker.usages == [IngredientUsage("butter", 3)]
        assert tracker.total == pytest.approx(12.0)

    def test_update_to_zero_removes(self):
        tracker = IngredientCostTracker(CATALOG)
        tracker.add_ingredient("rice", 5)
        tracker.update_quantity("rice", 0)
        assert tracker.usages == []
        assert tracker.total == 0

    def test_notifies_only_on_change(self):
        seen = []
        tracker = IngredientCostTracker(CATALOG, on_total=seen.append)
        tracker.add_ingredient("chicken", 2)
        tracker.add_ingredient("saffron", 1)
        tracker.remove_ingredient("chicken")
        assert seen == [7.0, 0.0]
