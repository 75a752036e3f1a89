"""Pipeboard — Metrics Output Models."""

from typing import Optional, List
from pydantic import BaseModel

from app.models.sales_models import Sale


# ─────────────────────────────────────────────
# PYDANTIC SCHEMAS — Dashboard Metrics
# ─────────────────────────────────────────────


class KPIResult(BaseModel):
    """Actual vs target for a single KPI."""

    name: str
    actual: float
    target: float
    achievement: float  # percentage, uncapped
    delta: float


class DistributionBucket(BaseModel):
    """Count of sales sharing a label (plan, periodicity, status)."""

    name: str
    count: int


class SellerRanking(BaseModel):
    """Seller ranked by closed revenue."""

    rank: int
    name: str
    revenue: float


class TargetComparison(BaseModel):
    """Actual vs target pair for the financial bar chart."""

    name: str
    actual: float
    target: float


class FunnelSummary(BaseModel):
    """Pipeline counts and rates."""

    total_opportunities: int = 0
    closed_count: int = 0
    open_count: int = 0
    cancelled_count: int = 0
    conversion_rate: float = 0.0
    total_revenue: float = 0.0
    total_mrr: float = 0.0


class DashboardMetrics(BaseModel):
    """Everything the dashboard and report need from one computation."""

    funnel: FunnelSummary = FunnelSummary()
    kpis: List[KPIResult] = []
    target_comparison: List[TargetComparison] = []
    plan_distribution: List[DistributionBucket] = []
    periodicity_distribution: List[DistributionBucket] = []
    status_distribution: List[DistributionBucket] = []
    seller_ranking: List[SellerRanking] = []


# ─────────────────────────────────────────────
# INSIGHT INPUT & REPORT
# ─────────────────────────────────────────────


class InsightSummary(BaseModel):
    """Metrics snapshot handed to the narrative generator."""

    total_opportunities: int = 0
    closed_count: int = 0
    open_count: int = 0
    cancelled_count: int = 0
    conversion_rate: float = 0.0
    conversion_rate_target: float = 0.0
    total_revenue: float = 0.0
    revenue_target: float = 0.0
    revenue_gap: float = 0.0
    total_mrr: float = 0.0
    mrr_target: float = 0.0
    mrr_gap: float = 0.0
    average_ticket: float = 0.0
    average_mrr: float = 0.0
    sales_needed: int = 0


class SalesReport(BaseModel):
    """Printable report payload."""

    title: str
    generated_at: str
    seller_name: str
    is_team_report: bool = False
    metrics: DashboardMetrics
    sales: List[Sale] = []
    insight: Optional[str] = None
