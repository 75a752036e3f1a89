"""Pipeboard — Printable Report Builder."""

from datetime import datetime, timezone
from typing import List, Optional

from app.models.sales_models import KPITargets, Sale, User
from app.models.metrics_models import SalesReport
from app.analyzer.metrics_engine import compute_metrics
from app.core.logging import get_logger

logger = get_logger("analyzer.report")

TEAM_REPORT_TITLE = "Relatório Gerencial de Equipe"
SELLER_REPORT_TITLE = "Performance Comercial & Análise de Vendas"


def build_report(
    user: User,
    sales: List[Sale],
    targets: KPITargets,
    insight: Optional[str] = None,
) -> SalesReport:
    """Assemble the report payload for the current user's view."""
    metrics = compute_metrics(sales, targets, include_ranking=user.is_admin)
    report = SalesReport(
        title=TEAM_REPORT_TITLE if user.is_admin else SELLER_REPORT_TITLE,
        generated_at=datetime.now(timezone.utc).isoformat(),
        seller_name=user.name,
        is_team_report=user.is_admin,
        metrics=metrics,
        sales=list(sales),
        insight=insight or None,
    )
    logger.info(f"Report built with {len(sales)} sales", extra={"user_id": user.id})
    return report
