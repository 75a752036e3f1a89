"""Pipeboard — Sales Insight Generation.

Builds the numeric summary, asks a provider for a narrative, and always
returns a string: failures degrade to a fixed fallback message.
"""

import asyncio
import time
from typing import Dict, List, Optional, Tuple, Type

from app.ai.base_provider import AIProvider
from app.ai.claude_provider import ClaudeProvider
from app.ai.openai_provider import OpenAIProvider
from app.ai.sarvam_provider import SarvamProvider
from app.analyzer.insight_summary import build_insight_prompt, build_insight_summary
from app.config import settings
from app.core.errors import InsightServiceError
from app.models.sales_models import KPITargets, Sale
from app.core.logging import get_logger

logger = get_logger("ai.insights")

FALLBACK_MESSAGE = "Erro ao calcular métricas avançadas."
EMPTY_ANSWER_MESSAGE = "Sem dados suficientes para análise numérica."

PROVIDERS: Dict[str, Type[AIProvider]] = {
    "sarvam": SarvamProvider,
    "openai": OpenAIProvider,
    "claude": ClaudeProvider,
}


def select_provider(provider_name: str = "auto") -> Tuple[str, AIProvider]:
    """Select and return an available AI provider.

    When provider_name is 'auto', tries DEFAULT_AI_PROVIDER first,
    then falls through remaining providers.
    """
    if provider_name == "auto":
        default = settings.default_ai_provider
        if default in PROVIDERS:
            p = PROVIDERS[default]()
            if p.is_available():
                return default, p
        for name, cls in PROVIDERS.items():
            if name == default:
                continue  # already tried
            provider = cls()
            if provider.is_available():
                return name, provider
        raise InsightServiceError(
            "No AI provider configured. Set SARVAM_API_KEY, OPENAI_API_KEY, or ANTHROPIC_API_KEY."
        )

    if provider_name not in PROVIDERS:
        raise ValueError(f"Unknown provider: {provider_name}.")

    provider = PROVIDERS[provider_name]()
    if not provider.is_available():
        raise InsightServiceError(f"{provider_name} provider not configured.", provider_name)
    return provider_name, provider


async def generate_sales_insights(
    sales: List[Sale],
    targets: KPITargets,
    provider: Optional[AIProvider],
    timeout: Optional[float] = None,
) -> str:
    """Return a short narrative for the current numbers, or the fallback."""
    if provider is None:
        return FALLBACK_MESSAGE

    timeout = settings.ai_timeout_seconds if timeout is None else timeout
    prompt = build_insight_prompt(build_insight_summary(sales, targets))

    started = time.perf_counter()
    try:
        text = await asyncio.wait_for(provider.generate(prompt), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(
            f"Insight generation timed out after {timeout}s",
            extra={"provider": provider.name},
        )
        return FALLBACK_MESSAGE
    except Exception as e:
        logger.error(f"Insight generation failed: {e}", extra={"provider": provider.name})
        return FALLBACK_MESSAGE

    duration_ms = round((time.perf_counter() - started) * 1000, 1)
    logger.info(
        "Insight generated",
        extra={"provider": provider.name, "duration_ms": duration_ms},
    )
    return text.strip() if text and text.strip() else EMPTY_ANSWER_MESSAGE
