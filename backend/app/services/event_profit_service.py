"""
Per-event profit and dish popularity.

Menu revenue comes from the event's menu lines, food cost from the revenue
records booked against the event and labor cost from its staff assignments.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.event import Event
from app.models.event_menu_item import EventMenuItem
from app.models.menu_item import MenuItem
from app.models.revenue_record import RevenueRecord
from app.models.staff import StaffAssignment
from app.services.pricing_service import price_menu_line
from app.services.revenue_service import (
    EventProfit, PopularDish, build_event_profit, rank_popular_dishes, sort_event_profits,
)

logger = logging.getLogger(__name__)


def menu_revenue(event: Event) -> float:
    guests = event.number_of_guests or 0
    return sum(price_menu_line(line.effective_price, line.quantity, guests) for line in event.menu_items)


def labor_cost(assignments: Iterable[StaffAssignment]) -> float:
    return sum(a.labor_cost for a in assignments)


def compute_event_profits(db: Session, events: Sequence[Event]) -> List[EventProfit]:
    """
    Profit rows for `events`, newest event date first.
    """
    if not events:
        return []

    food_rows = db.query(
        RevenueRecord.event_id,
        func.sum(RevenueRecord.food_costs).label("food_cost"),
    ).filter(
        RevenueRecord.event_id.in_([e.id for e in events]),
    ).group_by(RevenueRecord.event_id).all()
    food_costs = {row.event_id: float(row.food_cost or 0) for row in food_rows}

    profits = [
        build_event_profit(
            event,
            revenue_menu=menu_revenue(event),
            food_cost=food_costs.get(event.id, 0.0),
            labor_cost=labor_cost(event.staff_assignments),
        )
        for event in events
    ]
    return sort_event_profits(profits)


def popular_dishes(db: Session, event_ids: Sequence, days: int = 180, limit: int = 10) -> List[PopularDish]:
    """
    Dishes most often put on the menus of `event_ids` in the last `days` days
    """
    if not event_ids:
        return []
    since = datetime.utcnow() - timedelta(days=days)
    rows = db.query(MenuItem.id, MenuItem.name).join(
        EventMenuItem, EventMenuItem.menu_item_id == MenuItem.id,
    ).filter(
        EventMenuItem.event_id.in_(event_ids),
        EventMenuItem.created_at >= since,
    ).all()
    logger.debug("Ranking %d dish selections since %s", len(rows), since.date())
    return rank_popular_dishes(((row.id, row.name) for row in rows), limit=limit)
