"""
Revenue and Analytics Schemas
"""
from typing import Optional, List, Dict
from datetime import date, datetime
from pydantic import BaseModel, Field
from uuid import UUID


class RevenueRecordCreate(BaseModel):
    """net_profit is derived from gross revenue minus costs on insert"""
    event_id: Optional[UUID] = None
    client_id: Optional[UUID] = None
    revenue_date: date
    gross_revenue: float = Field(..., ge=0)
    food_costs: float = Field(0.0, ge=0)
    labor_costs: float = Field(0.0, ge=0)
    other_expenses: float = Field(0.0, ge=0)
    tax_amount: float = Field(0.0, ge=0)
    payment_method: str = "cash"


class RevenueRecordUpdate(BaseModel):
    """Cost or revenue changes re-derive net_profit"""
    revenue_date: Optional[date] = None
    gross_revenue: Optional[float] = Field(None, ge=0)
    food_costs: Optional[float] = Field(None, ge=0)
    labor_costs: Optional[float] = Field(None, ge=0)
    other_expenses: Optional[float] = Field(None, ge=0)
    tax_amount: Optional[float] = Field(None, ge=0)
    payment_method: Optional[str] = None


class RevenueRecordResponse(RevenueRecordCreate):
    id: UUID
    organization_id: UUID
    net_profit: float
    created_at: datetime

    class Config:
        from_attributes = True


class RevenueRecordList(BaseModel):
    records: List[RevenueRecordResponse]
    total: int


class MonthlyBucketResponse(BaseModel):
    month: str
    revenue: float
    profit: float

    class Config:
        from_attributes = True


class ClientBucketResponse(BaseModel):
    client_name: str
    revenue: float
    events: int

    class Config:
        from_attributes = True


class RevenueAnalyticsResponse(BaseModel):
    total_revenue: float
    total_profit: float
    profit_margin: float
    average_event_revenue: float
    top_payment_method: Optional[str] = None
    revenue_by_month: List[MonthlyBucketResponse]
    revenue_by_client: List[ClientBucketResponse]
    record_count: int
    is_demo: bool = False

    class Config:
        from_attributes = True


class TaxReportResponse(BaseModel):
    year: int
    total_revenue: float
    total_taxes: float
    effective_tax_rate: float
    record_count: int

    class Config:
        from_attributes = True


class MonthlyEventRevenueResponse(BaseModel):
    month: str
    revenue: float
    events_count: int

    class Config:
        from_attributes = True


class EventStatsResponse(BaseModel):
    total_revenue: float
    total_events: int
    total_profit: float
    avg_profit_margin: float


class EventProfitResponse(BaseModel):
    event_id: UUID
    title: str
    event_date: Optional[date] = None
    guest_count: int
    status: str
    revenue_menu: float
    food_cost: float
    labor_cost: float
    gross_profit: float
    profit_margin_percent: Optional[float] = None

    class Config:
        from_attributes = True


class PopularDishResponse(BaseModel):
    menu_item_id: UUID
    name: str
    times_selected: int

    class Config:
        from_attributes = True


class DashboardResponse(BaseModel):
    """Sections that failed are None and listed in `errors`"""
    generation: int
    stale: bool = False
    analytics: Optional[RevenueAnalyticsResponse] = None
    monthly_events: Optional[List[MonthlyEventRevenueResponse]] = None
    event_profits: Optional[List[EventProfitResponse]] = None
    popular_dishes: Optional[List[PopularDishResponse]] = None
    stats: Optional[EventStatsResponse] = None
    errors: Dict[str, str] = Field(default_factory=dict)
