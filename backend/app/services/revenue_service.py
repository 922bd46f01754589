"""
Revenue aggregation service.

Groups flat revenue rows by calendar month and by client and derives the
summary figures shown on the analytics dashboard. All functions here are
pure: callers fetch the rows, these functions only reduce them.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "Unknown Client"


@dataclass
class RevenueEntry:
    """Minimal revenue row; ORM RevenueRecord instances are accepted too."""
    revenue_date: Union[date, str]
    gross_revenue: float
    net_profit: float
    client_id: Any = None
    payment_method: Optional[str] = None
    tax_amount: float = 0.0


@dataclass
class MonthlyBucket:
    month: str  # "YYYY-MM"
    revenue: float = 0.0
    profit: float = 0.0


@dataclass
class ClientBucket:
    client_name: str
    revenue: float = 0.0
    events: int = 0


@dataclass
class RevenueAnalytics:
    total_revenue: float = 0.0
    total_profit: float = 0.0
    profit_margin: float = 0.0
    average_event_revenue: float = 0.0
    top_payment_method: Optional[str] = None
    revenue_by_month: List[MonthlyBucket] = field(default_factory=list)
    revenue_by_client: List[ClientBucket] = field(default_factory=list)
    record_count: int = 0
    is_demo: bool = False


def _as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def month_key(value: Union[date, datetime, str]) -> str:
    """Calendar month of a date as "YYYY-MM"."""
    d = _as_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def _client_label(client_id, client_names: Optional[Mapping[Any, str]]) -> str:
    if client_id is None:
        return UNKNOWN_CLIENT
    if client_names is not None and client_id in client_names:
        return client_names[client_id]
    if client_names is not None and str(client_id) in client_names:
        return client_names[str(client_id)]
    return str(client_id)


def _safe_percent(numerator: float, denominator: float) -> float:
    return numerator / denominator * 100 if denominator else 0.0


def aggregate_revenue(
    records: Sequence[Any],
    client_names: Optional[Mapping[Any, str]] = None,
) -> RevenueAnalytics:
    """
    Aggregate revenue rows into monthly and per-client buckets plus totals.

    Args:
        records: Revenue rows, in any order
        client_names: Optional client id -> display name mapping. Ids with
            no entry are labelled by the id itself, rows with no client as
            "Unknown Client".

    Returns:
        RevenueAnalytics. Empty input yields zero totals and empty buckets.
    """
    total_revenue = 0.0
    total_profit = 0.0
    months: Dict[str, MonthlyBucket] = {}
    clients: Dict[str, ClientBucket] = {}
    payment_counts: Dict[str, int] = {}

    for record in records:
        gross = record.gross_revenue or 0.0
        profit = record.net_profit or 0.0
        total_revenue += gross
        total_profit += profit

        key = month_key(record.revenue_date)
        bucket = months.setdefault(key, MonthlyBucket(month=key))
        bucket.revenue += gross
        bucket.profit += profit

        name = _client_label(record.client_id, client_names)
        client_bucket = clients.setdefault(name, ClientBucket(client_name=name))
        client_bucket.revenue += gross
        client_bucket.events += 1

        if record.payment_method:
            payment_counts[record.payment_method] = payment_counts.get(record.payment_method, 0) + 1

    count = len(records)
    # max() keeps the first of equal counts, i.e. first encountered wins
    top_payment_method = max(payment_counts, key=payment_counts.get) if payment_counts else None

    return RevenueAnalytics(
        total_revenue=total_revenue,
        total_profit=total_profit,
        profit_margin=_safe_percent(total_profit, total_revenue),
        average_event_revenue=total_revenue / count if count else 0.0,
        top_payment_method=top_payment_method,
        revenue_by_month=sorted(months.values(), key=lambda b: b.month),
        revenue_by_client=sorted(clients.values(), key=lambda b: b.revenue, reverse=True),
        record_count=count,
    )


def demo_revenue_analytics() -> RevenueAnalytics:
    """Fixed sample dashboard used for demonstrations only."""
    logger.info("Serving demo revenue analytics")
    return RevenueAnalytics(
        total_revenue=24750.0,
        total_profit=7425.0,
        profit_margin=30.0,
        average_event_revenue=4950.0,
        top_payment_method="credit_card",
        revenue_by_month=[
            MonthlyBucket(month="2024-01", revenue=8250.0, profit=2475.0),
            MonthlyBucket(month="2024-02", revenue=9500.0, profit=2850.0),
            MonthlyBucket(month="2024-03", revenue=7000.0, profit=2100.0),
        ],
        revenue_by_client=[
            ClientBucket(client_name="Johnson Wedding", revenue=9500.0, events=1),
            ClientBucket(client_name="TechCorp", revenue=6250.0, events=2),
            ClientBucket(client_name="Smith Anniversary", revenue=5500.0, events=1),
            ClientBucket(client_name="Miller Family", revenue=3500.0, events=1),
        ],
        record_count=5,
        is_demo=True,
    )


@dataclass
class TaxReport:
    year: int
    total_revenue: float
    total_taxes: float
    effective_tax_rate: float
    record_count: int


def build_tax_report(records: Iterable[Any], year: int) -> TaxReport:
    """Revenue and tax totals for one calendar year."""
    year_records = [r for r in records if _as_date(r.revenue_date).year == year]
    total_taxes = sum((r.tax_amount or 0.0) for r in year_records)
    total_revenue = sum((r.gross_revenue or 0.0) for r in year_records)
    return TaxReport(
        year=year,
        total_revenue=total_revenue,
        total_taxes=total_taxes,
        effective_tax_rate=_safe_percent(total_taxes, total_revenue),
        record_count=len(year_records),
    )


@dataclass
class MonthlyEventRevenue:
    month: str
    revenue: float = 0.0
    events_count: int = 0


def aggregate_monthly_event_revenue(events: Iterable[Any], statuses: Optional[Iterable[str]] = None) -> List[MonthlyEventRevenue]:
    """
    Group booked events by month of their event date.

    Events without a date or revenue are ignored, as are events whose status
    is not in `statuses` (when given).
    """
    allowed = None if statuses is None else {getattr(s, "value", s) for s in statuses}
    buckets: Dict[str, MonthlyEventRevenue] = {}
    for event in events:
        if event.event_date is None or event.total_revenue is None:
            continue
        status = getattr(event.status, "value", event.status)
        if allowed is not None and status not in allowed:
            continue
        key = month_key(event.event_date)
        bucket = buckets.setdefault(key, MonthlyEventRevenue(month=key))
        bucket.revenue += event.total_revenue
        bucket.events_count += 1
    return sorted(buckets.values(), key=lambda b: b.month)


@dataclass
class EventProfit:
    """Menu revenue against food and labor cost for one event."""
    event_id: Any
    title: str
    event_date: Optional[date]
    guest_count: int
    status: str
    revenue_menu: float
    food_cost: float
    labor_cost: float
    gross_profit: float
    profit_margin_percent: Optional[float] = None


def shift_hours(start: Optional[datetime], end: Optional[datetime]) -> float:
    """Length of a shift in hours, 0 when either end is missing or end is not after start."""
    if start is None or end is None or end <= start:
        return 0.0
    return (end - start).total_seconds() / 3600


def build_event_profit(event: Any, revenue_menu: float, food_cost: float, labor_cost: float) -> EventProfit:
    """
    Profit row for one event. The margin is left as None for an event with
    no menu revenue.
    """
    gross_profit = revenue_menu - food_cost - labor_cost
    return EventProfit(
        event_id=event.id,
        title=event.title,
        event_date=event.event_date,
        guest_count=event.number_of_guests or 0,
        status=getattr(event.status, "value", event.status),
        revenue_menu=revenue_menu,
        food_cost=food_cost,
        labor_cost=labor_cost,
        gross_profit=gross_profit,
        profit_margin_percent=gross_profit / revenue_menu * 100 if revenue_menu else None,
    )


def sort_event_profits(profits: Sequence[EventProfit]) -> List[EventProfit]:
    """Newest event date first; undated events last."""
    dated = sorted((p for p in profits if p.event_date is not None), key=lambda p: p.event_date, reverse=True)
    undated = [p for p in profits if p.event_date is None]
    return dated + undated


@dataclass
class PopularDish:
    menu_item_id: Any
    name: str
    times_selected: int


def rank_popular_dishes(selections: Iterable[Tuple[Any, str]], limit: int = 10) -> List[PopularDish]:
    """
    Count how often each dish was put on an event menu.

    Args:
        selections: (menu item id, name) per selection
        limit: Number of dishes to return

    Returns:
        Most selected first; ties ordered by name
    """
    counts: Dict[Any, PopularDish] = {}
    for item_id, name in selections:
        dish = counts.setdefault(item_id, PopularDish(menu_item_id=item_id, name=name, times_selected=0))
        dish.times_selected += 1
    ranked = sorted(counts.values(), key=lambda d: (-d.times_selected, d.name))
    return ranked[:limit]


def summarize_event_stats(monthly: Sequence[MonthlyEventRevenue], event_profits: Sequence[EventProfit]) -> Dict[str, float]:
    """Headline totals across monthly event revenue and per-event profit."""
    margins = [p.profit_margin_percent or 0.0 for p in event_profits]
    return {
        "total_revenue": sum(m.revenue for m in monthly),
        "total_events": sum(m.events_count for m in monthly),
        "total_profit": sum(p.gross_profit for p in event_profits),
        "avg_profit_margin": sum(margins) / len(margins) if margins else 0.0,
    }
