"""Pipeboard — MRR Derivation Rule.

MRR = revenue / periodicity divisor, rounded half-up to cents.
Certificate sales carry no recurring value, so their MRR is always 0.
"""

from decimal import Decimal, ROUND_HALF_UP

from app.models.sales_models import CERTIFICATE_PLAN, Periodicity, SaleDraft

PERIODICITY_DIVISORS = {
    Periodicity.MONTHLY.value: 1,
    Periodicity.QUARTERLY.value: 3,
    Periodicity.SEMIANNUAL.value: 6,
    Periodicity.ANNUAL.value: 12,
}

CENTS = Decimal("0.01")


def periodicity_divisor(periodicity) -> int:
    """Months covered by one billing cycle; unknown values count as monthly."""
    if isinstance(periodicity, Periodicity):
        periodicity = periodicity.value
    return PERIODICITY_DIVISORS.get(periodicity, 1)


def round_cents(value: float) -> float:
    """Round to two decimals, ties away from zero (0.625 -> 0.63)."""
    return float(Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP))


def derive_mrr(revenue: float, periodicity, plan: str) -> float:
    """Compute the MRR for a (revenue, periodicity, plan) triple."""
    if plan == CERTIFICATE_PLAN:
        return 0.0
    return round_cents((revenue or 0.0) / periodicity_divisor(periodicity))


def apply_derivation(draft: SaleDraft) -> SaleDraft:
    """Return the draft with its MRR brought in line with the rule.

    The stored MRR is compared exactly against the derived value and the
    draft is returned untouched when they match, so re-applying the rule is
    a no-op.
    """
    mrr = derive_mrr(draft.revenue, draft.periodicity, draft.plan)
    if draft.mrr == mrr:
        return draft
    return draft.model_copy(update={"mrr": mrr})
