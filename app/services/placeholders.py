"""Pipeboard — Placeholder Sales.

Demo records shown for members who have never saved anything, so the
dashboards aren't empty on first login. Values are pseudo-random but seeded
by user id, so a member always gets the same placeholders.
"""

import random
from datetime import date
from typing import List, Optional

from app.models.sales_models import Periodicity, Sale, SalesStatus

EXAMPLE_NOTE = "Carga Inicial"


def example_sales(seller_name: str) -> List[Sale]:
    """The two reference sales used for the first roster member."""
    return [
        Sale(
            id="001",
            customer_id="001",
            date=date(2025, 11, 28),
            customer_name="Cliente Exemplo 01",
            revenue=1500,
            plan="Essencial",
            periodicity=Periodicity.MONTHLY,
            mrr=1500,
            payment_method="Cartão",
            purchase_date=date(2025, 11, 28),
            status=SalesStatus.SOLD_PAID,
            seller_name=seller_name,
        ),
        Sale(
            id="002",
            customer_id="002",
            date=date(2025, 11, 29),
            customer_name="Cliente Exemplo 02",
            revenue=3000,
            plan="Controle",
            periodicity=Periodicity.MONTHLY,
            mrr=3000,
            payment_method="Boleto",
            purchase_date=date(2025, 11, 29),
            status=SalesStatus.OPEN,
            seller_name=seller_name,
        ),
    ]


def generate_placeholder_sales(
    seller_name: str,
    user_id: str,
    with_examples: bool = False,
    today: Optional[date] = None,
) -> List[Sale]:
    """Build 2–5 monthly placeholder sales for a member."""
    if with_examples:
        return example_sales(seller_name)

    rng = random.Random(user_id)
    today = today or date.today()
    sales: List[Sale] = []
    for i in range(rng.randint(2, 5)):
        revenue = float(rng.randint(1200, 5199))
        sales.append(
            Sale(
                id=f"{user_id}_init_{i}",
                customer_id=f"ID-{rng.randint(0, 999)}",
                date=today,
                customer_name=f"Cliente {i + 1} ({seller_name})",
                revenue=revenue,
                plan="Essencial" if rng.random() > 0.5 else "Completo",
                periodicity=Periodicity.MONTHLY,
                mrr=revenue,
                payment_method="Cartão",
                purchase_date=today,
                status=SalesStatus.SOLD_PAID if rng.random() > 0.3 else SalesStatus.OPEN,
                notes=EXAMPLE_NOTE,
                seller_name=seller_name,
            )
        )
    return sales
