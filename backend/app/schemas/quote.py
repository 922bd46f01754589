"""
Quote, profit and ingredient cost calculator schemas
"""
from typing import Optional, List
from pydantic import BaseModel, Field
from uuid import UUID


class UpchargeOption(BaseModel):
    name: str
    amount: float

    class Config:
        from_attributes = True


class QuoteRequest(BaseModel):
    """Plate prices and gratuity default to the configured house values"""
    adult_count: int = Field(0, ge=0)
    child_count: int = Field(0, ge=0)
    selected_upcharges: List[str] = Field(default_factory=list)
    adult_base_price: Optional[float] = Field(None, ge=0)
    child_base_price: Optional[float] = Field(None, ge=0)
    gratuity_percent: Optional[float] = Field(None, ge=0, le=100)


class QuoteResponse(BaseModel):
    per_guest_upcharge: float
    adult_total: float
    child_total: float
    subtotal: float
    gratuity_amount: float
    total: float
    gratuity_percent: float

    class Config:
        from_attributes = True


class ToggleUpchargeRequest(BaseModel):
    selected: List[str] = Field(default_factory=list)
    name: str


class ToggleUpchargeResponse(BaseModel):
    selected: List[str]
    changed: bool


class EventProfitRequest(BaseModel):
    number_of_guests: int = Field(50, ge=0)
    price_per_person: float = Field(85.0, ge=0)
    gratuity_percent: float = Field(18.0, ge=0, le=100)
    gratuity_enabled: bool = True
    labor_costs: List[float] = Field(default_factory=list)
    misc_expenses: List[float] = Field(default_factory=list)
    food_cost_mode: str = "percentage"
    food_cost_percentage: float = Field(30.0, ge=0, le=100)
    food_cost_fixed: float = Field(0.0, ge=0)
    target_profit_margin: float = Field(25.0, ge=0)
    business_tax_percentage: float = Field(8.0, ge=0, le=100)


class EventProfitResponse(BaseModel):
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

    class Config:
        from_attributes = True


class IngredientUsageIn(BaseModel):
    ingredient_id: UUID
    quantity: float = Field(..., ge=0)


class IngredientCostRequest(BaseModel):
    usages: List[IngredientUsageIn]


class IngredientCostResponse(BaseModel):
    total_cost: float
    missing_ingredient_ids: List[UUID] = Field(default_factory=list)
