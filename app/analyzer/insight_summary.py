"""Pipeboard — Insight Summary Builder.

Turns a sale list + targets into the numeric snapshot the narrative
generator reads, and formats it into the analyst prompt.
"""

import math
from typing import List

from app.models.sales_models import KPITargets, Sale, SalesStatus
from app.models.metrics_models import InsightSummary
from app.analyzer.metrics_engine import closed_sales, conversion_rate


def _sales_needed(gap: float, average: float) -> int:
    """Deals still required to close ``gap`` at the current average value."""
    if average > 0 and gap > 0:
        return math.ceil(gap / average)
    return 0


def build_insight_summary(sales: List[Sale], targets: KPITargets) -> InsightSummary:
    """Compute the gap/projection figures for the insight prompt."""
    won = closed_sales(sales)
    total = len(sales)
    closed_count = len(won)

    total_revenue = math.fsum(s.revenue for s in won)
    total_mrr = math.fsum(s.mrr for s in won)
    revenue_gap = targets.revenue - total_revenue
    mrr_gap = targets.mrr - total_mrr

    average_ticket = total_revenue / closed_count if closed_count > 0 else 0.0
    average_mrr = total_mrr / closed_count if closed_count > 0 else 0.0

    # Focus on whichever target is further away
    sales_needed = max(
        _sales_needed(revenue_gap, average_ticket),
        _sales_needed(mrr_gap, average_mrr),
    )

    return InsightSummary(
        total_opportunities=total,
        closed_count=closed_count,
        open_count=sum(1 for s in sales if s.status == SalesStatus.OPEN),
        cancelled_count=sum(1 for s in sales if s.status == SalesStatus.CANCELLED),
        conversion_rate=conversion_rate(closed_count, total),
        conversion_rate_target=targets.conversion_rate,
        total_revenue=total_revenue,
        revenue_target=targets.revenue,
        revenue_gap=revenue_gap,
        total_mrr=total_mrr,
        mrr_target=targets.mrr,
        mrr_gap=mrr_gap,
        average_ticket=average_ticket,
        average_mrr=average_mrr,
        sales_needed=sales_needed,
    )


def build_insight_prompt(summary: InsightSummary) -> str:
    """Format the analyst prompt (Portuguese, numbers-first)."""
    return f"""
Atue como um Analista de Performance de Vendas da equipe "Sharks". Sua resposta deve ser puramente baseada em MATEMÁTICA e ESTRATÉGIA NUMÉRICA.

DADOS DO CENÁRIO ATUAL:
- Oportunidades Recebidas (Leads Totais): {summary.total_opportunities}
- Vendas Fechadas (Vendido + Vendido Pago): {summary.closed_count}
- Em Aberto (Pipeline): {summary.open_count}
- Canceladas/Perdidas: {summary.cancelled_count}
- Taxa de Conversão Real: {summary.conversion_rate * 100:.1f}% (Meta: {summary.conversion_rate_target * 100:.1f}%)

FINANCEIRO:
- Faturamento Atual: R$ {summary.total_revenue:.2f} (Meta: R$ {summary.revenue_target:.2f})
- Gap (Falta): R$ {summary.revenue_gap:.2f}
- Ticket Médio Atual: R$ {summary.average_ticket:.2f}

PROJEÇÃO MATEMÁTICA:
Para bater a meta financeira, faltam aproximadamente R$ {summary.revenue_gap:.2f}.
Com o ticket médio atual, isso significa que precisamos de mais {summary.sales_needed} vendas.

INSTRUÇÕES DE RESPOSTA (EM PORTUGUÊS):
1. Comece DIRETAMENTE com o número mágico: "Para bater a meta, você precisa de X vendas."
2. Analise o Funil: Cite quantas oportunidades entraram vs quantas fecharam. Se a conversão estiver baixa, aponte isso numericamente.
3. Dê uma tática numérica para o Pipeline em Aberto (ex: "Você tem X clientes em aberto, precisa converter Y% deles para atingir o objetivo").
4. Seja breve, analítico e use bullet points. Nada de textos longos motivacionais. Foco no resultado.
""".strip()
