"""Pipeboard — Sale List Mutations.

Each operation takes the current list and returns a new one; persistence is
left to the caller.
"""

import uuid
from typing import List, Tuple

from app.analyzer.derivation import apply_derivation
from app.core.errors import SaleNotFoundError
from app.models.sales_models import (
    DEFAULT_PLAN,
    Periodicity,
    Sale,
    SaleDraft,
    SalesStatus,
    UNKNOWN_CUSTOMER,
    User,
)
from app.core.logging import get_logger

logger = get_logger("services.ledger")

FALLBACK_PAYMENT_METHOD = "Outro"


def new_sale_id() -> str:
    return uuid.uuid4().hex


def _coerce_periodicity(value: str) -> Periodicity:
    try:
        return Periodicity(value)
    except ValueError:
        return Periodicity.MONTHLY


def draft_to_sale(draft: SaleDraft, sale_id: str) -> Sale:
    """Materialise a (derived) draft into a full Sale record."""
    return Sale(
        id=sale_id,
        customer_id=draft.customer_id or "",
        customer_name=draft.customer_name or UNKNOWN_CUSTOMER,
        date=draft.date,
        revenue=draft.revenue or 0.0,
        mrr=draft.mrr or 0.0,
        plan=draft.plan or DEFAULT_PLAN,
        periodicity=_coerce_periodicity(draft.periodicity),
        payment_method=draft.payment_method or FALLBACK_PAYMENT_METHOD,
        purchase_date=draft.date,
        status=draft.status,
        hub_link=draft.hub_link or "",
        notes=draft.notes or "",
        seller_name=draft.seller_name,
    )


def submit_sale(sales: List[Sale], draft: SaleDraft, user: User) -> Tuple[List[Sale], Sale]:
    """Create a new sale, or overwrite the one carrying ``draft.id``.

    The MRR rule is applied first. New sales are attributed to ``user``;
    edits keep the seller of the sale they replace.
    """
    draft = apply_derivation(draft)

    if draft.id:
        existing = next((s for s in sales if s.id == draft.id), None)
        if existing is None:
            raise SaleNotFoundError(draft.id)
        sale = draft_to_sale(draft, draft.id)
        sale = sale.model_copy(update={"seller_name": existing.seller_name})
        logger.info("Sale overwritten", extra={"user_id": user.id, "sale_id": sale.id})
        return [sale if s.id == sale.id else s for s in sales], sale

    sale = draft_to_sale(draft, new_sale_id())
    sale = sale.model_copy(update={"seller_name": user.name})
    logger.info("Sale created", extra={"user_id": user.id, "sale_id": sale.id})
    return [*sales, sale], sale


def update_status(sales: List[Sale], sale_id: str, status: SalesStatus) -> List[Sale]:
    """Quick edit: change only the status of one sale."""
    if not any(s.id == sale_id for s in sales):
        raise SaleNotFoundError(sale_id)
    return [
        s.model_copy(update={"status": status}) if s.id == sale_id else s
        for s in sales
    ]


def delete_sale(sales: List[Sale], sale_id: str) -> List[Sale]:
    remaining = [s for s in sales if s.id != sale_id]
    if len(remaining) == len(sales):
        raise SaleNotFoundError(sale_id)
    return remaining


def search_sales(sales: List[Sale], term: str) -> List[Sale]:
    """Case-insensitive match on customer name, customer id, plan or seller."""
    needle = (term or "").lower()
    if not needle:
        return list(sales)
    return [
        s
        for s in sales
        if needle in s.customer_name.lower()
        or (s.customer_id and needle in s.customer_id.lower())
        or needle in s.plan.lower()
        or (s.seller_name and needle in s.seller_name.lower())
    ]
