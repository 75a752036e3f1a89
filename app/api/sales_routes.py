"""Pipeboard — Sales & Targets Routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from app.api.deps import get_current_user, get_roster, get_store, require_member
from app.analyzer.derivation import apply_derivation
from app.core.errors import SaleNotFoundError
from app.models.sales_models import (
    PLANS,
    KPITargets,
    Periodicity,
    Sale,
    SaleDraft,
    SalesStatus,
    TeamMember,
    User,
)
from app.services.data_service import load_user_data, save_sales, save_targets
from app.services.record_store import RecordStore
from app.services import sales_ledger
from app.core.logging import get_logger

logger = get_logger("api.sales")

router = APIRouter(tags=["Sales"])


# ── Request / Response Models ──


class SalesListResponse(BaseModel):
    status: str = "success"
    count: int
    sales: List[Sale]


class SaleResponse(BaseModel):
    status: str = "success"
    sale: Sale


class StatusUpdateRequest(BaseModel):
    """Request body for PATCH /sales/{id}/status."""

    status: SalesStatus


class SaleOptionsResponse(BaseModel):
    plans: List[str]
    periodicities: List[str]
    statuses: List[str]


# ── Sales ──


@router.get("/sales", response_model=SalesListResponse)
async def list_sales(
    search: Optional[str] = Query(None, description="Customer, ID, plan or seller"),
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    """List the user's sales (the whole team for admin)."""
    sales, _ = load_user_data(user, store, roster)
    if search:
        sales = sales_ledger.search_sales(sales, search)
    return SalesListResponse(count=len(sales), sales=sales)


@router.post("/sales", response_model=SaleResponse)
async def submit_sale(
    draft: SaleDraft,
    user: User = Depends(require_member),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    """Create a sale, or overwrite the one whose id the draft carries."""
    sales, _ = load_user_data(user, store, roster)
    try:
        sales, sale = sales_ledger.submit_sale(sales, draft, user)
    except SaleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    save_sales(user, sales, store)
    return SaleResponse(sale=sale)


@router.post("/sales/derive-mrr", response_model=SaleDraft)
async def derive_mrr_preview(draft: SaleDraft):
    """Return the draft with MRR recalculated, without saving anything."""
    return apply_derivation(draft)


@router.get("/sales/options", response_model=SaleOptionsResponse)
async def sale_options():
    """Choices offered by the sale form's plan, periodicity and status fields."""
    return SaleOptionsResponse(
        plans=PLANS,
        periodicities=[p.value for p in Periodicity],
        statuses=[s.value for s in SalesStatus],
    )


@router.patch("/sales/{sale_id}/status", response_model=SaleResponse)
async def update_sale_status(
    sale_id: str,
    request: StatusUpdateRequest,
    user: User = Depends(require_member),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    sales, _ = load_user_data(user, store, roster)
    try:
        sales = sales_ledger.update_status(sales, sale_id, request.status)
    except SaleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    save_sales(user, sales, store)
    return SaleResponse(sale=next(s for s in sales if s.id == sale_id))


@router.delete("/sales/{sale_id}")
async def delete_sale(
    sale_id: str,
    user: User = Depends(require_member),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    sales, _ = load_user_data(user, store, roster)
    try:
        sales = sales_ledger.delete_sale(sales, sale_id)
    except SaleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    save_sales(user, sales, store)
    return {"status": "success", "deleted": sale_id}


# ── Targets ──


@router.get("/targets", response_model=KPITargets, tags=["Targets"])
async def get_targets(
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    _, targets = load_user_data(user, store, roster)
    return targets


@router.put("/targets", response_model=KPITargets, tags=["Targets"])
async def update_targets(
    targets: KPITargets,
    user: User = Depends(require_member),
    store: RecordStore = Depends(get_store),
):
    save_targets(user, targets, store)
    logger.info("Targets updated", extra={"user_id": user.id})
    return targets
