"""
Quote, event profit and ingredient cost calculators
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import require_permission
from app.models.user import User
from app.models.inventory_item import InventoryItem
from app.schemas.quote import (
    UpchargeOption, QuoteRequest, QuoteResponse, ToggleUpchargeRequest, ToggleUpchargeResponse,
    EventProfitRequest, EventProfitResponse, IngredientCostRequest, IngredientCostResponse,
)
from app.services.pricing_service import (
    UPCHARGE_OPTIONS, calculate_quote, resolve_upcharges, toggle_upcharge, calculate_event_profit,
)
from app.services.cost_service import IngredientUsage, calculate_ingredient_cost

router = APIRouter()


@router.get("/upcharges", response_model=List[UpchargeOption])
async def list_upcharges(
    current_user: User = Depends(require_permission("events.view")),
):
    """Protein upcharge options, in catalog order"""
    return [UpchargeOption.model_validate(u) for u in UPCHARGE_OPTIONS.values()]


@router.post("/calculate", response_model=QuoteResponse)
async def calculate(
    data: QuoteRequest,
    current_user: User = Depends(require_permission("events.view")),
):
    """
    Price a quote. Omitted plate prices and gratuity use the house defaults.
    """
    gratuity = data.gratuity_percent if data.gratuity_percent is not None else settings.DEFAULT_GRATUITY_PERCENT
    breakdown = calculate_quote(
        adult_count=data.adult_count,
        child_count=data.child_count,
        upcharges=resolve_upcharges(data.selected_upcharges),
        adult_base_price=data.adult_base_price if data.adult_base_price is not None else settings.ADULT_PLATE_PRICE,
        child_base_price=data.child_base_price if data.child_base_price is not None else settings.CHILD_PLATE_PRICE,
        gratuity_percent=gratuity,
    )
    return QuoteResponse(gratuity_percent=gratuity, **breakdown.__dict__)


@router.post("/toggle-upcharge", response_model=ToggleUpchargeResponse)
async def toggle(
    data: ToggleUpchargeRequest,
    current_user: User = Depends(require_permission("events.view")),
):
    resolve_upcharges([data.name])
    selected = toggle_upcharge(data.selected, data.name)
    return ToggleUpchargeResponse(selected=selected, changed=selected != list(data.selected))


@router.post("/event-profit", response_model=EventProfitResponse)
async def event_profit(
    data: EventProfitRequest,
    current_user: User = Depends(require_permission("analytics.view")),
):
    """
    Project costs and profit for an event and the price needed to reach
    the target margin
    """
    return EventProfitResponse.model_validate(calculate_event_profit(**data.model_dump()))


@router.post("/ingredient-cost", response_model=IngredientCostResponse)
async def ingredient_cost(
    data: IngredientCostRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
):
    """
    Cost a set of ingredient quantities against the organization's
    inventory unit costs. Unknown ingredients are skipped and listed.
    """
    ids = {u.ingredient_id for u in data.usages}
    rows = db.query(InventoryItem.id, InventoryItem.cost_per_unit).filter(
        InventoryItem.organization_id == current_user.organization_id,
        InventoryItem.id.in_(ids),
    ).all() if ids else []
    catalog = {item_id: cost for item_id, cost in rows}

    total = calculate_ingredient_cost(
        [IngredientUsage(u.ingredient_id, u.quantity) for u in data.usages],
        catalog,
    )
    missing = [u.ingredient_id for u in data.usages if u.ingredient_id not in catalog]
    return IngredientCostResponse(total_cost=total, missing_ingredient_ids=missing)
