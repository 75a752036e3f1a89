"""Pipeboard — AI Insight Routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_current_user, get_roster, get_store
from app.ai.insights import FALLBACK_MESSAGE, generate_sales_insights, select_provider
from app.analyzer.insight_summary import build_insight_summary
from app.core.errors import InsightServiceError
from app.models.metrics_models import InsightSummary
from app.models.sales_models import TeamMember, User
from app.services.data_service import load_user_data
from app.services.record_store import RecordStore
from app.core.logging import get_logger

logger = get_logger("api.ai")

router = APIRouter(tags=["AI"])


# ── Request / Response Models ──


class InsightRequest(BaseModel):
    """Request body for POST /generate-insights."""

    provider: str = "auto"


class InsightResponse(BaseModel):
    """Response for POST /generate-insights."""

    status: str
    provider_used: str
    insight: str
    summary: InsightSummary


# ── Endpoints ──


@router.post("/generate-insights", response_model=InsightResponse)
async def generate_insights(
    request: InsightRequest,
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
):
    """Generate the strategic narrative for the current numbers.

    Provider problems never fail the request: the fallback text is returned
    with status "fallback".
    """
    sales, targets = load_user_data(user, store, roster)
    summary = build_insight_summary(sales, targets)

    try:
        provider_name, provider = select_provider(request.provider)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InsightServiceError as e:
        logger.warning(f"No provider for insights: {e}", extra={"user_id": user.id})
        return InsightResponse(
            status="fallback", provider_used="none", insight=FALLBACK_MESSAGE, summary=summary
        )

    insight = await generate_sales_insights(sales, targets, provider)
    return InsightResponse(
        status="fallback" if insight == FALLBACK_MESSAGE else "success",
        provider_used=provider_name,
        insight=insight,
        summary=summary,
    )
