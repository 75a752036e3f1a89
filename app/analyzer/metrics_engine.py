"""Pipeboard — Metrics Engine.

Computes the dashboard aggregates from a sale list and a target config:
funnel counts, revenue/MRR totals, target achievement,
plan/periodicity/status distributions and the seller ranking.

Everything here is pure: no store access, no ambient state.
"""

import math
from typing import Dict, Iterable, List

from app.models.sales_models import KPITargets, Sale, SalesStatus
from app.models.metrics_models import (
    DashboardMetrics,
    DistributionBucket,
    FunnelSummary,
    KPIResult,
    SellerRanking,
    TargetComparison,
)
from app.core.logging import get_logger

logger = get_logger("analyzer.metrics")

NOT_INFORMED = "Não Informado"
UNKNOWN_SELLER = "Desconhecido"

# Display order of the status chart
STATUS_ORDER = [
    SalesStatus.SOLD_PAID,
    SalesStatus.SOLD,
    SalesStatus.OPEN,
    SalesStatus.CANCELLED,
]


def closed_sales(sales: Iterable[Sale]) -> List[Sale]:
    """Sales that count as won (Sold or Sold+Paid)."""
    return [s for s in sales if s.is_closed]


def conversion_rate(closed_count: int, total_opportunities: int) -> float:
    return closed_count / total_opportunities if total_opportunities > 0 else 0.0


def achievement(actual: float, target: float) -> float:
    """Actual as a percentage of target. Not capped at 100."""
    return (actual / target) * 100 if target > 0 else 0.0


def kpi_result(name: str, actual: float, target: float) -> KPIResult:
    return KPIResult(
        name=name,
        actual=actual,
        target=target,
        achievement=achievement(actual, target),
        delta=actual - target,
    )


def _count_by(labels: Iterable[str]) -> Dict[str, int]:
    # dicts keep first-seen order, which the distributions rely on
    counts: Dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return counts


def plan_distribution(sales: List[Sale]) -> List[DistributionBucket]:
    """Closed sales per plan, most frequent first (stable on ties)."""
    counts = _count_by(s.plan or NOT_INFORMED for s in closed_sales(sales))
    buckets = [DistributionBucket(name=k, count=v) for k, v in counts.items()]
    return sorted(buckets, key=lambda b: b.count, reverse=True)


def periodicity_distribution(sales: List[Sale]) -> List[DistributionBucket]:
    """Closed sales per periodicity, in first-seen order."""
    counts = _count_by(s.periodicity.value for s in closed_sales(sales))
    return [DistributionBucket(name=k, count=v) for k, v in counts.items()]


def status_distribution(sales: List[Sale]) -> List[DistributionBucket]:
    """All sales per status; empty statuses are left out."""
    counts = _count_by(s.status for s in sales)
    return [
        DistributionBucket(name=status.value, count=counts[status])
        for status in STATUS_ORDER
        if counts.get(status, 0) > 0
    ]


def seller_ranking(sales: List[Sale]) -> List[SellerRanking]:
    """Rank sellers by closed revenue, descending (stable on ties)."""
    revenue_by_seller: Dict[str, float] = {}
    for s in closed_sales(sales):
        name = s.seller_name or UNKNOWN_SELLER
        revenue_by_seller[name] = revenue_by_seller.get(name, 0.0) + s.revenue

    sorted_sellers = sorted(
        revenue_by_seller.items(),
        key=lambda x: x[1],
        reverse=True,
    )
    return [
        SellerRanking(rank=rank, name=name, revenue=revenue)
        for rank, (name, revenue) in enumerate(sorted_sellers, 1)
    ]


def build_funnel(sales: List[Sale]) -> FunnelSummary:
    won = closed_sales(sales)
    total = len(sales)
    return FunnelSummary(
        total_opportunities=total,
        closed_count=len(won),
        open_count=sum(1 for s in sales if s.status == SalesStatus.OPEN),
        cancelled_count=sum(1 for s in sales if s.status == SalesStatus.CANCELLED),
        conversion_rate=conversion_rate(len(won), total),
        total_revenue=math.fsum(s.revenue for s in won),
        total_mrr=math.fsum(s.mrr for s in won),
    )


def compute_metrics(
    sales: List[Sale],
    targets: KPITargets,
    include_ranking: bool = False,
) -> DashboardMetrics:
    """Compute every dashboard aggregate.

    ``include_ranking`` is set for the admin (team) view only; other callers
    get an empty ranking.
    """
    funnel = build_funnel(sales)

    kpis = [
        kpi_result("deals_closed", funnel.closed_count, targets.deals_closed),
        kpi_result("conversion_rate", funnel.conversion_rate, targets.conversion_rate),
        kpi_result("revenue", funnel.total_revenue, targets.revenue),
        kpi_result("mrr", funnel.total_mrr, targets.mrr),
    ]

    comparison = [
        TargetComparison(name="MRR", actual=funnel.total_mrr, target=targets.mrr),
        TargetComparison(
            name="Faturamento", actual=funnel.total_revenue, target=targets.revenue
        ),
    ]

    metrics = DashboardMetrics(
        funnel=funnel,
        kpis=kpis,
        target_comparison=comparison,
        plan_distribution=plan_distribution(sales),
        periodicity_distribution=periodicity_distribution(sales),
        status_distribution=status_distribution(sales),
        seller_ranking=seller_ranking(sales) if include_ranking else [],
    )

    logger.debug(
        f"Computed metrics for {funnel.total_opportunities} sales "
        f"({funnel.closed_count} closed, ranking={include_ranking})"
    )
    return metrics
