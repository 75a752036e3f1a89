"""Pipeboard — Sales Domain Models.

Sale, target and identity schemas. Stored values (status, periodicity, plan)
keep the labels the sales team uses on screen.
"""

from datetime import date as date_type
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class SalesStatus(str, Enum):
    """Lifecycle state of a sale."""

    OPEN = "Em Aberto"
    SOLD = "Vendido"
    SOLD_PAID = "Vendido Pago"
    CANCELLED = "Cancelado"


CLOSED_STATUSES = frozenset({SalesStatus.SOLD, SalesStatus.SOLD_PAID})


class Periodicity(str, Enum):
    """Billing cycle of a contract."""

    MONTHLY = "Mensal"
    QUARTERLY = "Trimestral"
    SEMIANNUAL = "Semestral"
    ANNUAL = "Anual"


CERTIFICATE_PLAN = "Certificado"

PLANS: List[str] = [
    "Click NF-e",
    "Essencial",
    "Controle",
    "Completo",
    "Gestão Integrada",
    CERTIFICATE_PLAN,
]

DEFAULT_PLAN = "Essencial"
DEFAULT_PAYMENT_METHOD = "Cartão de Crédito"
UNKNOWN_CUSTOMER = "Desconhecido"


def _today() -> date_type:
    return date_type.today()


# ─────────────────────────────────────────────
# SALE RECORDS
# ─────────────────────────────────────────────


class Sale(BaseModel):
    """One tracked sales opportunity."""

    id: str
    customer_id: str = ""
    customer_name: str = ""
    date: date_type
    revenue: float = Field(default=0.0, ge=0)
    mrr: float = Field(default=0.0, ge=0)
    plan: str = DEFAULT_PLAN
    periodicity: Periodicity = Periodicity.MONTHLY
    payment_method: str = ""
    purchase_date: Optional[date_type] = None
    status: SalesStatus = SalesStatus.OPEN
    hub_link: str = ""
    notes: str = ""
    seller_name: Optional[str] = None

    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_STATUSES


class SaleDraft(BaseModel):
    """Editable form buffer for creating or editing a sale.

    A draft without ``id`` becomes a new sale on submit; a draft carrying an
    existing ``id`` overwrites that sale in full.
    """

    id: Optional[str] = None
    customer_id: str = ""
    customer_name: str = ""
    date: date_type = Field(default_factory=_today)
    revenue: float = Field(default=0.0, ge=0)
    mrr: float = Field(default=0.0, ge=0)
    plan: str = DEFAULT_PLAN
    periodicity: str = Periodicity.MONTHLY.value
    payment_method: str = DEFAULT_PAYMENT_METHOD
    status: SalesStatus = SalesStatus.OPEN
    hub_link: str = ""
    notes: str = ""
    seller_name: Optional[str] = None

    @classmethod
    def from_sale(cls, sale: Sale) -> "SaleDraft":
        """Load an existing sale into the edit buffer."""
        data = sale.model_dump(exclude={"purchase_date"})
        data["periodicity"] = sale.periodicity.value
        return cls(**data)


# ─────────────────────────────────────────────
# TARGETS & IDENTITY
# ─────────────────────────────────────────────


class KPITargets(BaseModel):
    """Target configuration for a user (or the synthesized team aggregate)."""

    mrr: float = Field(default=0.0, ge=0)
    revenue: float = Field(default=0.0, ge=0)
    conversion_rate: float = Field(default=0.0, ge=0, le=1)
    deals_closed: int = Field(default=0, ge=0)


class User(BaseModel):
    """Authenticated identity."""

    id: str
    email: str
    name: str
    is_admin: bool = False


class TeamMember(BaseModel):
    """A known login identity from the team roster."""

    id: str
    email: str
    name: str
