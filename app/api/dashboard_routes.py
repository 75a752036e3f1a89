"""Pipeboard — Dashboard & Report Routes."""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_current_user, get_roster, get_store
from app.analyzer.metrics_engine import compute_metrics
from app.analyzer.report import build_report
from app.models.metrics_models import DashboardMetrics, SalesReport
from app.models.sales_models import KPITargets, TeamMember, User
from app.services.data_service import load_user_data
from app.services.record_store import RecordStore

router = APIRouter(tags=["Dashboard"])


class DashboardResponse(BaseModel):
    status: str = "success"
    user: User
    targets: KPITargets
    metrics: DashboardMetrics


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    """Funnel, KPI achievement, distributions (and ranking for admin)."""
    sales, targets = load_user_data(user, store, roster)
    metrics = compute_metrics(sales, targets, include_ranking=user.is_admin)
    return DashboardResponse(user=user, targets=targets, metrics=metrics)


@router.get("/report", response_model=SalesReport)
async def get_report(
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    """Printable report payload for the current view."""
    sales, targets = load_user_data(user, store, roster)
    return build_report(user, sales, targets)
