"""Pipeboard — User Data Service.

Loads and saves each member's sale list and targets through the injected
RecordStore. The admin never owns data: it sees a read-only union of every
roster member's sales.
"""

from typing import List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from app.config import settings
from app.models.sales_models import KPITargets, Sale, TeamMember, User
from app.services.record_store import RecordStore, sales_key, targets_key
from app.services.placeholders import generate_placeholder_sales
from app.core.roster import find_member_by_id
from app.core.logging import get_logger

logger = get_logger("services.data")

_sales_adapter = TypeAdapter(List[Sale])

FALLBACK_SELLER_NAME = "Vendedor"


def default_targets() -> KPITargets:
    return KPITargets(
        mrr=settings.default_target_mrr,
        revenue=settings.default_target_revenue,
        conversion_rate=settings.default_target_conversion_rate,
        deals_closed=settings.default_target_deals_closed,
    )


def admin_targets() -> KPITargets:
    """Synthesized team-wide targets for the admin view."""
    return KPITargets(
        mrr=settings.admin_target_mrr,
        revenue=settings.admin_target_revenue,
        conversion_rate=settings.default_target_conversion_rate,
        deals_closed=settings.admin_target_deals_closed,
    )


# ── Parsing (corrupt data is treated as absent) ──


def parse_sales(raw: Optional[str], key: str = "") -> Optional[List[Sale]]:
    if raw is None:
        return None
    try:
        return _sales_adapter.validate_json(raw)
    except (PydanticValidationError, ValueError) as e:
        logger.warning(f"Discarding malformed sales at {key}: {e}")
        return None


def parse_targets(raw: Optional[str], key: str = "") -> Optional[KPITargets]:
    if raw is None:
        return None
    try:
        return KPITargets.model_validate_json(raw)
    except (PydanticValidationError, ValueError) as e:
        logger.warning(f"Discarding malformed targets at {key}: {e}")
        return None


def _placeholders_for(member: TeamMember, roster: List[TeamMember]) -> List[Sale]:
    return generate_placeholder_sales(
        member.name,
        member.id,
        with_examples=bool(roster) and roster[0].id == member.id,
    )


# ── Loading ──


def load_aggregate_view(
    roster: List[TeamMember],
    store: RecordStore,
    seed_placeholders: Optional[bool] = None,
) -> List[Sale]:
    """Union of every roster member's stored sales, in roster order.

    Members without a stored entry contribute placeholder sales when
    ``seed_placeholders`` is on. Nothing is written back.
    """
    if seed_placeholders is None:
        seed_placeholders = settings.seed_placeholder_data

    all_sales: List[Sale] = []
    for member in roster:
        key = sales_key(member.id)
        stored = parse_sales(store.get(key), key)
        if stored is not None:
            all_sales.extend(stored)
        elif seed_placeholders:
            all_sales.extend(_placeholders_for(member, roster))

    logger.info(f"Aggregate view loaded: {len(all_sales)} sales from {len(roster)} members")
    return all_sales


def load_user_data(
    user: User,
    store: RecordStore,
    roster: List[TeamMember],
    seed_placeholders: Optional[bool] = None,
) -> Tuple[List[Sale], KPITargets]:
    """Return (sales, targets) for the user's dashboard."""
    if seed_placeholders is None:
        seed_placeholders = settings.seed_placeholder_data

    if user.is_admin:
        return load_aggregate_view(roster, store, seed_placeholders), admin_targets()

    s_key = sales_key(user.id)
    sales = parse_sales(store.get(s_key), s_key)
    if sales is None:
        sales = []
        if seed_placeholders:
            member = find_member_by_id(roster, user.id)
            if member is None:
                member = TeamMember(id=user.id, email=user.email, name=FALLBACK_SELLER_NAME)
            sales = _placeholders_for(member, roster)

    t_key = targets_key(user.id)
    targets = parse_targets(store.get(t_key), t_key) or default_targets()
    return sales, targets


# ── Saving (fire-and-forget, full replacement) ──


def save_sales(user: User, sales: List[Sale], store: RecordStore) -> bool:
    if user.is_admin:
        return False
    ok = store.set(sales_key(user.id), _sales_adapter.dump_json(sales).decode())
    if not ok:
        logger.error("Failed to save sales", extra={"user_id": user.id})
    return ok


def save_targets(user: User, targets: KPITargets, store: RecordStore) -> bool:
    if user.is_admin:
        return False
    ok = store.set(targets_key(user.id), targets.model_dump_json())
    if not ok:
        logger.error("Failed to save targets", extra={"user_id": user.id})
    return ok
