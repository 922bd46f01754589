"""
Revenue Records and Analytics API Endpoints
"""
import asyncio
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import require_permission, scoped_events, ensure_client_in_org, ensure_event_in_org
from app.models.user import User, UserRole
from app.models.client import Client
from app.models.event import Event, REVENUE_STATUSES
from app.models.revenue_record import RevenueRecord
from app.schemas.revenue import (
    RevenueRecordCreate, RevenueRecordUpdate, RevenueRecordResponse, RevenueRecordList,
    RevenueAnalyticsResponse, TaxReportResponse, MonthlyEventRevenueResponse,
    EventProfitResponse, PopularDishResponse, EventStatsResponse, DashboardResponse,
)
from app.services.event_profit_service import compute_event_profits, popular_dishes
from app.services.revenue_service import (
    aggregate_revenue, demo_revenue_analytics, build_tax_report,
    aggregate_monthly_event_revenue, summarize_event_stats,
)
from app.utils.request_tracker import dashboard_requests

logger = logging.getLogger(__name__)

router = APIRouter()

DASHBOARD_VIEW = "revenue-dashboard"


def _scoped_records(db: Session, current_user: User, start_date: Optional[date] = None, end_date: Optional[date] = None):
    query = db.query(RevenueRecord).filter(RevenueRecord.organization_id == current_user.organization_id)
    if current_user.role == UserRole.CLIENT:
        query = query.filter(RevenueRecord.client_id == current_user.client_id, RevenueRecord.client_id.isnot(None))
    if start_date:
        query = query.filter(RevenueRecord.revenue_date >= start_date)
    if end_date:
        query = query.filter(RevenueRecord.revenue_date <= end_date)
    return query


def _get_record_or_404(db: Session, record_id: UUID, current_user: User) -> RevenueRecord:
    record = _scoped_records(db, current_user).filter(RevenueRecord.id == record_id).first()
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Revenue record not found"
        )
    return record


def _client_names(db: Session, current_user: User) -> dict:
    clients = db.query(Client.id, Client.name).filter(
        Client.organization_id == current_user.organization_id,
    ).all()
    return {client_id: name for client_id, name in clients}


def _revenue_analytics(db: Session, current_user: User, start_date=None, end_date=None) -> RevenueAnalyticsResponse:
    records = _scoped_records(db, current_user, start_date, end_date).all()
    analytics = aggregate_revenue(records, _client_names(db, current_user))
    return RevenueAnalyticsResponse.model_validate(analytics)


def _monthly_event_revenue(db: Session, current_user: User) -> List[MonthlyEventRevenueResponse]:
    monthly = aggregate_monthly_event_revenue(scoped_events(db, current_user).all(), statuses=REVENUE_STATUSES)
    return [MonthlyEventRevenueResponse.model_validate(m) for m in monthly]


def _event_profits(db: Session, current_user: User, event_id: Optional[UUID] = None) -> List[EventProfitResponse]:
    query = scoped_events(db, current_user)
    if event_id:
        query = query.filter(Event.id == event_id)
    profits = compute_event_profits(db, query.all())
    return [EventProfitResponse.model_validate(p) for p in profits]


def _popular_dishes(db: Session, current_user: User, days: int = 180, limit: int = 10) -> List[PopularDishResponse]:
    event_ids = [row.id for row in scoped_events(db, current_user).with_entities(Event.id).all()]
    return [PopularDishResponse.model_validate(d) for d in popular_dishes(db, event_ids, days=days, limit=limit)]


@router.get("/records", response_model=RevenueRecordList)
async def list_revenue_records(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    """
    Revenue records, newest first, optionally within a date range
    """
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start_date must not be after end_date")
    records = _scoped_records(db, current_user, start_date, end_date).order_by(
        RevenueRecord.revenue_date.desc(),
    ).all()
    return RevenueRecordList(
        records=[RevenueRecordResponse.model_validate(r) for r in records],
        total=len(records),
    )


@router.post("/records", response_model=RevenueRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_revenue_record(
    data: RevenueRecordCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.create")),
):
    """
    Record realised revenue; net profit is fixed at gross minus costs
    """
    ensure_client_in_org(db, data.client_id, current_user)
    ensure_event_in_org(db, data.event_id, current_user)

    record = RevenueRecord(
        organization_id=current_user.organization_id,
        net_profit=data.gross_revenue - data.food_costs - data.labor_costs - data.other_expenses,
        **data.model_dump(),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return RevenueRecordResponse.model_validate(record)


@router.get("/records/{record_id}", response_model=RevenueRecordResponse)
async def get_revenue_record(
    record_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
):
    return RevenueRecordResponse.model_validate(_get_record_or_404(db, record_id, current_user))


@router.patch("/records/{record_id}", response_model=RevenueRecordResponse)
async def update_revenue_record(
    record_id: UUID,
    data: RevenueRecordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.edit")),
):
    """
    Correct a revenue record; net profit follows the new figures
    """
    record = _get_record_or_404(db, record_id, current_user)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(record, field, value)
    record.net_profit = record.gross_revenue - record.food_costs - record.labor_costs - record.other_expenses
    db.commit()
    db.refresh(record)
    return RevenueRecordResponse.model_validate(record)


@router.delete("/records/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_revenue_record(
    record_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.edit")),
):
    record = _get_record_or_404(db, record_id, current_user)
    db.delete(record)
    db.commit()


@router.get("/analytics", response_model=RevenueAnalyticsResponse)
async def get_revenue_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    demo: bool = Query(False, description="Serve the fixed demonstration dataset"),
):
    """
    Totals, margin and month/client breakdowns over revenue records
    """
    if demo:
        if not settings.DEMO_ANALYTICS_ENABLED:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Demo analytics are disabled")
        return RevenueAnalyticsResponse.model_validate(demo_revenue_analytics())
    return _revenue_analytics(db, current_user, start_date, end_date)


@router.get("/tax-report", response_model=TaxReportResponse)
async def get_tax_report(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
    year: Optional[int] = Query(None, ge=1900, le=9999),
):
    """
    Revenue and collected tax for a calendar year (default: current year)
    """
    year = year or date.today().year
    records = _scoped_records(db, current_user, date(year, 1, 1), date(year, 12, 31)).all()
    return TaxReportResponse.model_validate(build_tax_report(records, year))


@router.get("/monthly-events", response_model=List[MonthlyEventRevenueResponse])
async def get_monthly_event_revenue(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
):
    """
    Revenue of confirmed, running and completed events grouped by month
    """
    return _monthly_event_revenue(db, current_user)


@router.get("/event-profit", response_model=List[EventProfitResponse])
async def get_event_profits(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
    event_id: Optional[UUID] = Query(None),
):
    """
    Menu revenue, food and labor cost and gross profit per event, newest first
    """
    return _event_profits(db, current_user, event_id)


@router.get("/popular-dishes", response_model=List[PopularDishResponse])
async def get_popular_dishes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
    days: int = Query(180, ge=1, le=3650),
    limit: int = Query(10, ge=1, le=100),
):
    """
    Dishes most often chosen for event menus over the last `days` days
    """
    return _popular_dishes(db, current_user, days=days, limit=limit)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("analytics.view")),
):
    """
    Analytics dashboard. Each section is computed independently; a failed
    section is reported in `errors` and the rest are still returned.
    A response overtaken by a newer dashboard request from the same user
    is flagged `stale`.
    """
    view_key = (current_user.id, DASHBOARD_VIEW)
    generation = dashboard_requests.begin(view_key)

    async def section(name, fn):
        try:
            return fn()
        except Exception:
            db.rollback()
            logger.exception("Dashboard section %s failed", name)
            raise

    def stats():
        monthly = aggregate_monthly_event_revenue(scoped_events(db, current_user).all(), statuses=REVENUE_STATUSES)
        profits = compute_event_profits(db, scoped_events(db, current_user).all())
        return EventStatsResponse(**summarize_event_stats(monthly, profits))

    names = ("analytics", "monthly_events", "event_profits", "popular_dishes", "stats")
    results = await asyncio.gather(
        section("analytics", lambda: _revenue_analytics(db, current_user)),
        section("monthly_events", lambda: _monthly_event_revenue(db, current_user)),
        section("event_profits", lambda: _event_profits(db, current_user)),
        section("popular_dishes", lambda: _popular_dishes(db, current_user)),
        section("stats", stats),
        return_exceptions=True,
    )

    response = DashboardResponse(generation=generation)
    for name, result in zip(names, results):
        if isinstance(result, Exception):
            response.errors[name] = str(result) or result.__class__.__name__
        else:
            setattr(response, name, result)

    response.stale = not dashboard_requests.is_current(view_key, generation)
    return response
