"""
Unit tests for revenue aggregation, tax reporting, monthly event revenue and
per-event profit.
"""
from datetime import date, datetime
from types import SimpleNamespace

import pytest

from app.models.event import EventStatus, REVENUE_STATUSES
from app.services.revenue_service import (
    UNKNOWN_CLIENT,
    RevenueEntry,
    aggregate_monthly_event_revenue,
    aggregate_revenue,
    build_event_profit,
    build_tax_report,
    demo_revenue_analytics,
    month_key,
    rank_popular_dishes,
    shift_hours,
    sort_event_profits,
    summarize_event_stats,
)


def _profit(revenue, food=0.0, labor=0.0, day=None, title="Event"):
    event = SimpleNamespace(id=title, title=title, event_date=day, number_of_guests=10, status=EventStatus.CONFIRMED)
    return build_event_profit(event, revenue_menu=revenue, food_cost=food, labor_cost=labor)


def entry(day, gross, profit, client=None, method=None, tax=0.0):
    return RevenueEntry(
        revenue_date=day,
        gross_revenue=gross,
        net_profit=profit,
        client_id=client,
        payment_method=method,
        tax_amount=tax,
    )


class TestAggregateRevenue:
    """Monthly and per-client buckets plus totals."""

    def test_two_records_same_month(self):
        records = [
            entry("2024-01-05", 1000, 300, client="A"),
            entry("2024-01-20", 500, 100, client="B"),
        ]
        result = aggregate_revenue(records)

        assert len(result.revenue_by_month) == 1
        month = result.revenue_by_month[0]
        assert (month.month, month.revenue, month.profit) == ("2024-01", 1500, 400)

        assert [(c.client_name, c.revenue, c.events) for c in result.revenue_by_client] == [
            ("A", 1000, 1),
            ("B", 500, 1),
        ]
        assert result.total_revenue == 1500
        assert result.profit_margin == pytest.approx(26.6667, rel=1e-4)
        assert result.average_event_revenue == 750

    def test_conservation(self):
        records = [
            entry(date(2024, 3, 1), 120.5, 10, client="A"),
            entry(date(2024, 1, 9), 80.25, 5),
            entry(date(2024, 3, 30), 300, 90, client="B"),
            entry(date(2023, 12, 31), 45, -5, client="A"),
        ]
        result = aggregate_revenue(records)
        by_month = sum(b.revenue for b in result.revenue_by_month)
        by_client = sum(b.revenue for b in result.revenue_by_client)
        assert by_month == pytest.approx(result.total_revenue)
        assert by_client == pytest.approx(result.total_revenue)

    def test_months_ascending_clients_descending(self):
        records = [
            entry("2024-03-01", 10, 1, client="A"),
            entry("2023-11-15", 50, 1, client="B"),
            entry("2024-01-01", 30, 1, client="C"),
        ]
        result = aggregate_revenue(records)
        assert [b.month for b in result.revenue_by_month] == ["2023-11", "2024-01", "2024-03"]
        assert [b.client_name for b in result.revenue_by_client] == ["B", "C", "A"]

    def test_empty_input_is_zero_not_demo(self):
        result = aggregate_revenue([])
        assert result.total_revenue == 0
        assert result.total_profit == 0
        assert result.profit_margin == 0
        assert result.average_event_revenue == 0
        assert result.top_payment_method is None
        assert result.revenue_by_month == []
        assert result.revenue_by_client == []
        assert result.is_demo is False

    def test_zero_revenue_margin_is_zero(self):
        result = aggregate_revenue([entry("2024-05-01", 0, -50)])
        assert result.profit_margin == 0

    def test_client_names_and_unknown_client(self):
        records = [entry("2024-01-01", 100, 10, client=1), entry("2024-01-02", 50, 5)]
        result = aggregate_revenue(records, client_names={1: "TechCorp"})
        assert {b.client_name for b in result.revenue_by_client} == {"TechCorp", UNKNOWN_CLIENT}

    def test_top_payment_method_tie_goes_to_first(self):
        records = [
            entry("2024-01-01", 1, 0, method="cash"),
            entry("2024-01-02", 1, 0, method="card"),
            entry("2024-01-03", 1, 0, method="card"),
            entry("2024-01-04", 1, 0, method="cash"),
        ]
        assert aggregate_revenue(records).top_payment_method == "cash"

    def test_demo_dataset_is_flagged(self):
        demo = demo_revenue_analytics()
        assert demo.is_demo is True
        assert sum(b.revenue for b in demo.revenue_by_month) == pytest.approx(demo.total_revenue)


class TestTaxReport:
    """Yearly revenue and collected tax."""

    def test_year_filter_and_rate(self):
        records = [
            entry("2024-02-01", 1000, 0, tax=80),
            entry("2024-11-30", 500, 0, tax=40),
            entry("2023-12-31", 999, 0, tax=99),
        ]
        report = build_tax_report(records, 2024)
        assert report.total_revenue == 1500
        assert report.total_taxes == 120
        assert report.effective_tax_rate == pytest.approx(8.0)
        assert report.record_count == 2

    def test_no_revenue_rate_is_zero(self):
        report = build_tax_report([], 2024)
        assert report.effective_tax_rate == 0
        assert report.record_count == 0


class TestMonthlyEventRevenue:
    """Event revenue grouped by event month."""

    def test_groups_by_month_and_status(self):
        events = [
            SimpleNamespace(event_date=date(2024, 6, 1), total_revenue=900.0, status=EventStatus.CONFIRMED),
            SimpleNamespace(event_date=date(2024, 6, 20), total_revenue=100.0, status=EventStatus.COMPLETED),
            SimpleNamespace(event_date=date(2024, 5, 3), total_revenue=400.0, status=EventStatus.IN_PROGRESS),
            SimpleNamespace(event_date=date(2024, 6, 9), total_revenue=700.0, status=EventStatus.BOOKED),
            SimpleNamespace(event_date=None, total_revenue=50.0, status=EventStatus.CONFIRMED),
            SimpleNamespace(event_date=date(2024, 6, 9), total_revenue=None, status=EventStatus.CONFIRMED),
        ]
        monthly = aggregate_monthly_event_revenue(events, statuses=REVENUE_STATUSES)
        assert [(m.month, m.revenue, m.events_count) for m in monthly] == [
            ("2024-05", 400.0, 1),
            ("2024-06", 1000.0, 2),
        ]

    def test_summarize_event_stats(self):
        events = [SimpleNamespace(event_date=date(2024, 6, 1), total_revenue=900.0, status="confirmed")]
        monthly = aggregate_monthly_event_revenue(events)
        profits = [_profit(revenue=1000, food=500, labor=200), _profit(revenue=0)]
        stats = summarize_event_stats(monthly, profits)
        assert stats["total_revenue"] == 900.0
        assert stats["total_events"] == 1
        assert stats["total_profit"] == 300
        # the event without menu revenue counts as a 0% margin
        assert stats["avg_profit_margin"] == pytest.approx(15.0)


def test_month_key_accepts_strings_and_dates():
    assert month_key("2024-01-05") == "2024-01"
    assert month_key(date(2023, 12, 31)) == "2023-12"


class TestEventProfit:
    """Per-event profit rows and dish popularity."""

    def test_profit_and_margin(self):
        row = _profit(revenue=400, food=120, labor=100)
        assert row.gross_profit == pytest.approx(180.0)
        assert row.profit_margin_percent == pytest.approx(45.0)
        assert row.status == "confirmed"
        assert row.guest_count == 10

    def test_no_menu_revenue_has_no_margin(self):
        row = _profit(revenue=0, labor=50)
        assert row.gross_profit == -50
        assert row.profit_margin_percent is None

    def test_newest_first_undated_last(self):
        rows = [
            _profit(100, day=date(2024, 1, 1), title="January"),
            _profit(100, title="Undated"),
            _profit(100, day=date(2024, 3, 1), title="March"),
        ]
        assert [r.title for r in sort_event_profits(rows)] == ["March", "January", "Undated"]

    def test_shift_hours(self):
        start = datetime(2024, 6, 1, 16, 0)
        assert shift_hours(start, datetime(2024, 6, 1, 20, 30)) == pytest.approx(4.5)
        assert shift_hours(start, None) == 0.0
        assert shift_hours(start, start) == 0.0

    def test_rank_popular_dishes(self):
        selections = [(1, "Rice"), (2, "Steak"), (2, "Steak"), (3, "Chicken"), (1, "Rice")]
        ranked = rank_popular_dishes(selections, limit=2)
        assert [(d.name, d.times_selected) for d in ranked] == [("Rice", 2), ("Steak", 2)]
        assert rank_popular_dishes([]) == []
